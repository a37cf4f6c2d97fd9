from unittest.mock import patch

import pytest

from modules.utils.modes import choose_mode


@pytest.mark.parametrize(
    "answers, expected_type",
    [
        ([1], "chat"),
        ([0, 101], "threads"),
        ([0, -1], ""),
    ],
)
def test_choose_mode(answers, expected_type):
    replies = [{"custom_question": answer} for answer in answers]

    with patch("modules.utils.modes.prompt", side_effect=replies) as prompt:
        mode = choose_mode()

    assert mode.type == expected_type
    assert prompt.call_count == len(answers)
