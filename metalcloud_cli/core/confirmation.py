"""
Confirmation gate for destructive infrastructure operations.
"""

from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

from metalcloud_cli.constants import CONFIRMATION_ANSWER
from metalcloud_cli.exceptions import NotConfirmedError


class ConfirmationGuard:
    """
    Decides whether a deploy, delete or revert may proceed.

    An explicit autoconfirm skips the prompt. Otherwise the operator must type
    exactly "yes". In non-interactive runs nothing is written and the
    operation is denied.
    """

    def __init__(
        self,
        autoconfirm: bool = False,
        interactive: bool = True,
        console: Optional[Console] = None,
        read_answer: Callable[[], str] = input,
    ):
        self.autoconfirm = autoconfirm
        self.interactive = interactive
        self.console = console or Console()
        self.read_answer = read_answer

    def confirm(self, message: str) -> bool:
        """
        Ask the operator to confirm.

        Args:
            message: Prompt naming the target resource

        Returns:
            True if confirmed
        """
        if self.autoconfirm:
            return True

        if not self.interactive:
            return False

        self.console.print(f"[yellow]{escape(message)}[/yellow] ", end="")
        try:
            answer = self.read_answer()
        except EOFError:
            return False

        return answer.strip() == CONFIRMATION_ANSWER

    def require(self, message: str) -> None:
        """
        Ask for confirmation and raise if it was not given.

        Raises:
            NotConfirmedError: If the operator did not confirm
        """
        if not self.confirm(message):
            raise NotConfirmedError()


def deploy_message(label: str, infrastructure_id: int) -> str:
    return (
        f"Deploying infrastructure {label} ({infrastructure_id}). "
        f'Are you sure? Type "yes" to continue:'
    )


def delete_message(label: str, infrastructure_id: int) -> str:
    return (
        f"Deleting infrastructure {label} ({infrastructure_id}). "
        f'Are you sure? Type "yes" to continue:'
    )


def revert_message(label: str, infrastructure_id: int) -> str:
    return (
        f"Reverting infrastructure {label} ({infrastructure_id}) to the deployed state. "
        f'Are you sure? Type "yes" to continue:'
    )
