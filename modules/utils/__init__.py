from .utils import (
    sleeping,
    make_border,
    format_time,
    format_address,
    format_response,
    get_current_date,
)
from .modes import choose_mode
from .tg_report import TgReport
