


BASE_URL            = "https://api1-pp.klokapp.ai/v1"

# --- MAIN SETTINGS ---
SCHEDULE_MODE       = "adaptive"                        # aggressive | conservative | adaptive
                                                        # aggressive   - тратить весь остаток сообщений за проход
                                                        # conservative - не больше 3 сообщений за проход
                                                        # adaptive     - половину остатка для премиум аккаунтов
                                                        #                (или если осталось больше 20), иначе до 5

PERSISTENT_THREADS  = True                              # True | False - продолжать один и тот же чат между сообщениями и запусками
THREAD_MAX_AGE      = 24                                # через сколько часов начинать новый чат вместо старого

PREMIUM_THRESHOLD   = 10                                # аккаунт считается премиум, если лимит сообщений больше этого числа

REFERRAL_CODE       = ""                                # реф код, передаваемый при входе. если не нужен - оставляй пустым

# --- SLEEP SETTINGS ---
CHAT_DELAY          = [5, 10]                           # задержка между сообщениями одного кошелька (мин. интервал, макс. задержка)
SLEEP_BETWEEN_WALLETS = 5                               # задержка после каждого кошелька
SLEEP_AFTER_PASS    = 300                               # задержка после прохода по всем кошелькам


# --- PERSONAL SETTINGS ---

TG_BOT_TOKEN        = ''                                # токен от тг бота (`12345:Abcde`) для уведомлений. если не нужно - оставляй пустым
TG_USER_ID          = []                                # тг айди куда должны приходить уведомления.
                                                        # [21957123] - для отправления уведомления только себе
                                                        # [21957123, 103514123] - отправлять нескольким людями
