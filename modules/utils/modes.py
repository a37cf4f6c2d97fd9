from dataclasses import dataclass
from inquirer import prompt, List
from inquirer.themes import load_theme_from_dict


@dataclass
class Mode:
    soft_id: int
    text: str
    type: str = ""

    def __str__(self) -> str:
        return self.text


MAIN_MENU = [
    Mode(soft_id=1, type="chat", text="1. Start chatting"),
    Mode(soft_id=0, text="Clear saved threads"),
]
THREADS_MENU = [
    Mode(soft_id=-1, text="← Back"),
    Mode(soft_id=101, type="threads", text="Delete saved threads"),
]


def ask_question(question: str, modes: list[Mode]):
    raw_answer = prompt(
        questions=[List(
            name='custom_question',
            message=question,
            choices=[(str(mode), mode.soft_id) for mode in modes],
            carousel=True,
        )],
        raise_keyboard_interrupt=True,
        theme=THEME,
    )
    return next(mode for mode in modes if mode.soft_id == raw_answer['custom_question'])


def choose_mode():
    answer = ask_question("🚀 Choose mode", MAIN_MENU)
    if answer.soft_id == 0:
        answer = ask_question("🧵 You want to forget all saved chat threads?", THREADS_MENU)
    return answer


THEME = load_theme_from_dict({"List": {
    "selection_cursor": "👉🏻",
}})
