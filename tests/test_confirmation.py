"""
Tests for the confirmation guard.
"""

import io
from unittest.mock import Mock

import pytest
from rich.console import Console

from metalcloud_cli.core import ConfirmationGuard, deploy_message
from metalcloud_cli.exceptions import NotConfirmedError


def make_guard(answer=None, **kwargs):
    reader = Mock(return_value=answer)
    console = Console(file=io.StringIO(), color_system=None, width=200)
    return ConfirmationGuard(console=console, read_answer=reader, **kwargs), reader


class TestConfirmationGuard:
    def test_autoconfirm_skips_prompt(self):
        guard, reader = make_guard(autoconfirm=True, interactive=False)

        assert guard.confirm("Deploy?") is True
        reader.assert_not_called()

    def test_non_interactive_denies_without_prompt(self):
        guard, reader = make_guard(answer="yes", interactive=False)

        assert guard.confirm("Deploy?") is False
        reader.assert_not_called()
        assert guard.console.file.getvalue() == ""

    @pytest.mark.parametrize("answer", ["yes", "yes\n", "  yes  "])
    def test_exact_yes_confirms(self, answer):
        guard, _ = make_guard(answer=answer)

        assert guard.confirm("Deploy?") is True

    @pytest.mark.parametrize("answer", ["", "y", "YES", "Yes", "no", "yes please"])
    def test_anything_else_denies(self, answer):
        guard, _ = make_guard(answer=answer)

        assert guard.confirm("Deploy?") is False

    def test_closed_stdin_denies(self):
        guard, reader = make_guard()
        reader.side_effect = EOFError

        assert guard.confirm("Deploy?") is False

    def test_prompt_is_shown(self):
        guard, _ = make_guard(answer="no")

        guard.confirm(deploy_message("prod-cluster", 1000))

        output = guard.console.file.getvalue()
        assert "prod-cluster (1000)" in output
        assert 'Type "yes" to continue' in output

    def test_require_raises_when_denied(self):
        guard, _ = make_guard(answer="no")

        with pytest.raises(NotConfirmedError) as exc_info:
            guard.require("Deploy?")

        assert exc_info.value.message == "Operation not confirmed. Aborting"
        assert exc_info.value.exit_code == 3

    @pytest.mark.parametrize("label", ["db[prod]", "web[/x]", "[bold]edge"])
    def test_prompt_shows_bracketed_label_verbatim(self, label):
        guard, _ = make_guard(answer="yes")

        assert guard.confirm(deploy_message(label, 7)) is True
        assert f"{label} (7)" in guard.console.file.getvalue()
