"""Infrastructure commands - list, get, create, update, delete, deploy, revert"""

from typing import Optional

import click

from metalcloud_cli.base import ApiCommand
from metalcloud_cli.constants import (
    DEFAULT_ATTEMPT_HARD_SHUTDOWN,
    DEFAULT_ATTEMPT_SOFT_SHUTDOWN,
    DEFAULT_BLOCK_CHECK_INTERVAL,
    DEFAULT_BLOCK_TIMEOUT,
    DEFAULT_SOFT_SHUTDOWN_TIMEOUT,
)
from metalcloud_cli.core import Clock, resolve_shutdown_policy
from metalcloud_cli.formatter import INFRASTRUCTURE_FIELDS, render
from metalcloud_cli.models import BlockingOptions, DeployOutcome, DeployRequest
from metalcloud_cli.services import DeployOrchestrator, InfrastructureService


class InfrastructureListCommand(ApiCommand):
    """List infrastructures."""

    def __init__(self, config, show_all=False, show_ordered=False, show_deleted=False, **kwargs):
        super().__init__(config, **kwargs)
        self.show_all = show_all
        self.show_ordered = show_ordered
        self.show_deleted = show_deleted

    def execute(self) -> None:
        service = InfrastructureService(self.ensure_client())
        infrastructures = service.list(
            show_all=self.show_all,
            show_ordered=self.show_ordered,
            show_deleted=self.show_deleted,
            owner_id=self.config.user_id,
        )
        self.emit(
            render(
                [i.to_dict() for i in infrastructures],
                INFRASTRUCTURE_FIELDS,
                self.config.output_format,
                title="Infrastructures",
            )
        )


class InfrastructureGetCommand(ApiCommand):
    """Show one infrastructure."""

    def __init__(self, config, infrastructure: str, **kwargs):
        super().__init__(config, **kwargs)
        self.infrastructure = infrastructure

    def execute(self) -> None:
        service = InfrastructureService(self.ensure_client())
        infrastructure = service.get(self.infrastructure)
        self.emit(
            render(infrastructure.to_dict(), INFRASTRUCTURE_FIELDS, self.config.output_format)
        )


class InfrastructureCreateCommand(ApiCommand):
    """Create an infrastructure."""

    def __init__(self, config, site_id: str, label: str, **kwargs):
        super().__init__(config, **kwargs)
        self.site_id = site_id
        self.label = label

    def execute(self) -> None:
        service = InfrastructureService(self.ensure_client())
        infrastructure = service.create(self.site_id, self.label)
        self.emit(
            render(infrastructure.to_dict(), INFRASTRUCTURE_FIELDS, self.config.output_format)
        )


class InfrastructureUpdateCommand(ApiCommand):
    """Update an infrastructure's label and custom variables."""

    def __init__(
        self,
        config,
        infrastructure: str,
        label: Optional[str] = None,
        custom_variables: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(config, **kwargs)
        self.infrastructure = infrastructure
        self.label = label
        self.custom_variables = custom_variables

    def execute(self) -> None:
        service = InfrastructureService(self.ensure_client())
        infrastructure = service.update(
            self.infrastructure, label=self.label, custom_variables=self.custom_variables
        )
        self.emit(
            render(infrastructure.to_dict(), INFRASTRUCTURE_FIELDS, self.config.output_format)
        )


class InfrastructureDeleteCommand(ApiCommand):
    """Delete an infrastructure after confirmation."""

    def __init__(self, config, infrastructure: str, autoconfirm: bool = False, **kwargs):
        super().__init__(config, **kwargs)
        self.infrastructure = infrastructure
        self.autoconfirm = autoconfirm

    def execute(self) -> None:
        self.show_header(title="Delete Infrastructure", infrastructure=self.infrastructure)
        logger = self.init_logger(self.infrastructure, "delete")

        service = InfrastructureService(self.ensure_client(), logger=logger)
        output = service.delete(self.infrastructure, self.make_guard(self.autoconfirm))

        self.print_success(f"Infrastructure {self.infrastructure} deleted")
        self.emit(output)


class InfrastructureRevertCommand(ApiCommand):
    """Revert an infrastructure to its deployed state after confirmation."""

    def __init__(self, config, infrastructure: str, autoconfirm: bool = False, **kwargs):
        super().__init__(config, **kwargs)
        self.infrastructure = infrastructure
        self.autoconfirm = autoconfirm

    def execute(self) -> None:
        self.show_header(title="Revert Infrastructure", infrastructure=self.infrastructure)
        logger = self.init_logger(self.infrastructure, "revert")

        orchestrator = DeployOrchestrator(
            self.ensure_client(), self.make_guard(self.autoconfirm), logger=logger
        )
        output = orchestrator.revert(self.infrastructure)

        self.print_success(f"Infrastructure {self.infrastructure} reverted")
        self.emit(output)


class InfrastructureDeployCommand(ApiCommand):
    """Deploy an infrastructure, optionally waiting until it is deployed."""

    def __init__(
        self,
        config,
        infrastructure: str,
        allow_data_loss: bool = False,
        attempt_soft_shutdown: bool = DEFAULT_ATTEMPT_SOFT_SHUTDOWN,
        attempt_hard_shutdown: bool = DEFAULT_ATTEMPT_HARD_SHUTDOWN,
        soft_shutdown_timeout: int = DEFAULT_SOFT_SHUTDOWN_TIMEOUT,
        force_shutdown: bool = False,
        autoconfirm: bool = False,
        block_until_deployed: bool = False,
        block_timeout: int = DEFAULT_BLOCK_TIMEOUT,
        block_check_interval: int = DEFAULT_BLOCK_CHECK_INTERVAL,
        clock: Optional[Clock] = None,
        **kwargs,
    ):
        super().__init__(config, **kwargs)
        self.infrastructure = infrastructure
        self.allow_data_loss = allow_data_loss
        self.attempt_soft_shutdown = attempt_soft_shutdown
        self.attempt_hard_shutdown = attempt_hard_shutdown
        self.soft_shutdown_timeout = soft_shutdown_timeout
        self.force_shutdown = force_shutdown
        self.autoconfirm = autoconfirm
        self.blocking = BlockingOptions(
            block_until_deployed=block_until_deployed,
            timeout_seconds=block_timeout,
            check_interval_seconds=block_check_interval,
        )
        self.clock = clock

    def execute(self) -> None:
        policy = resolve_shutdown_policy(
            self.attempt_soft_shutdown,
            self.attempt_hard_shutdown,
            self.soft_shutdown_timeout,
            force=self.force_shutdown,
        )
        request = DeployRequest(
            infrastructure=self.infrastructure,
            shutdown_policy=policy,
            allow_data_loss=self.allow_data_loss,
            confirmed=self.autoconfirm,
        )

        details = {"Shutdown": "forced" if policy.forced else "soft" if policy.attempt_soft else "hard"}
        if self.blocking.block_until_deployed:
            details["Wait"] = f"up to {self.blocking.timeout_seconds}s"
        self.show_header(
            title="Deploy Infrastructure",
            infrastructure=self.infrastructure,
            details=details,
        )
        logger = self.init_logger(self.infrastructure, "deploy")

        orchestrator = DeployOrchestrator(
            self.ensure_client(),
            self.make_guard(self.autoconfirm),
            clock=self.clock,
            logger=logger,
        )
        output = orchestrator.deploy(request, self.blocking)

        if orchestrator.outcome == DeployOutcome.SUCCEEDED:
            self.print_success(f"Infrastructure {self.infrastructure} deployed")
        elif orchestrator.outcome == DeployOutcome.DISPATCHED:
            self.print_success(f"Deploy of infrastructure {self.infrastructure} started")
        self.emit(output)


def _command_kwargs(ctx: click.Context) -> dict:
    obj = ctx.find_object(dict) or {}
    kwargs = {"client_factory": obj.get("client_factory")}
    if obj.get("console") is not None:
        kwargs["console"] = obj["console"]
    return kwargs


def _config(ctx: click.Context):
    return ctx.find_object(dict)["config"]


@click.command(name="list")
@click.option("--show-all", is_flag=True, help="List all infrastructures, not only your own.")
@click.option("--show-ordered", is_flag=True, help="Also list ordered (created but not deployed) infrastructures.")
@click.option("--show-deleted", is_flag=True, help="Also list deleted infrastructures.")
@click.pass_context
def infrastructure_list(ctx, show_all, show_ordered, show_deleted):
    """List infrastructures."""
    cmd = InfrastructureListCommand(
        _config(ctx),
        show_all=show_all,
        show_ordered=show_ordered,
        show_deleted=show_deleted,
        **_command_kwargs(ctx),
    )
    cmd.run()


@click.command(name="get")
@click.argument("infrastructure_id_or_label")
@click.pass_context
def infrastructure_get(ctx, infrastructure_id_or_label):
    """Get infrastructure details."""
    cmd = InfrastructureGetCommand(_config(ctx), infrastructure_id_or_label, **_command_kwargs(ctx))
    cmd.run()


@click.command(name="create")
@click.argument("site_id")
@click.argument("label")
@click.pass_context
def infrastructure_create(ctx, site_id, label):
    """Create new infrastructure."""
    cmd = InfrastructureCreateCommand(_config(ctx), site_id, label, **_command_kwargs(ctx))
    cmd.run()


@click.command(name="update")
@click.argument("infrastructure_id_or_label")
@click.argument("new_label", required=False)
@click.option("--custom-variables", default=None, help="Infrastructure custom variables as a JSON object.")
@click.pass_context
def infrastructure_update(ctx, infrastructure_id_or_label, new_label, custom_variables):
    """Update infrastructure configuration."""
    cmd = InfrastructureUpdateCommand(
        _config(ctx),
        infrastructure_id_or_label,
        label=new_label,
        custom_variables=custom_variables,
        **_command_kwargs(ctx),
    )
    cmd.run()


@click.command(name="delete")
@click.argument("infrastructure_id_or_label")
@click.option("--autoconfirm", is_flag=True, help="Assume the operation is confirmed.")
@click.pass_context
def infrastructure_delete(ctx, infrastructure_id_or_label, autoconfirm):
    """Delete infrastructure."""
    cmd = InfrastructureDeleteCommand(
        _config(ctx), infrastructure_id_or_label, autoconfirm=autoconfirm, **_command_kwargs(ctx)
    )
    cmd.run()


@click.command(name="revert")
@click.argument("infrastructure_id_or_label")
@click.option("--autoconfirm", is_flag=True, help="Assume the operation is confirmed.")
@click.pass_context
def infrastructure_revert(ctx, infrastructure_id_or_label, autoconfirm):
    """Revert infrastructure changes to the deployed state."""
    cmd = InfrastructureRevertCommand(
        _config(ctx), infrastructure_id_or_label, autoconfirm=autoconfirm, **_command_kwargs(ctx)
    )
    cmd.run()


@click.command(name="deploy")
@click.argument("infrastructure_id_or_label")
@click.option("--allow-data-loss", is_flag=True, help="Do not fail when the deploy is expected to lose data.")
@click.option(
    "--attempt-soft-shutdown/--no-attempt-soft-shutdown",
    default=DEFAULT_ATTEMPT_SOFT_SHUTDOWN,
    show_default=True,
    help="Attempt a soft (ACPI) power off of all servers before the deploy.",
)
@click.option(
    "--attempt-hard-shutdown/--no-attempt-hard-shutdown",
    default=DEFAULT_ATTEMPT_HARD_SHUTDOWN,
    show_default=True,
    help="Force a hard power off when the soft shutdown timeout expires.",
)
@click.option(
    "--soft-shutdown-timeout",
    type=int,
    default=DEFAULT_SOFT_SHUTDOWN_TIMEOUT,
    show_default=True,
    help="Seconds to wait for soft shutdown before forcing hard shutdown.",
)
@click.option("--force-shutdown", is_flag=True, help="Skip soft shutdown and power off all servers.")
@click.option("--autoconfirm", is_flag=True, help="Assume the operation is confirmed.")
@click.option("--block-until-deployed", is_flag=True, help="Wait until the deploy finishes.")
@click.option(
    "--block-timeout",
    type=int,
    default=DEFAULT_BLOCK_TIMEOUT,
    show_default=True,
    help="Seconds to wait for the deploy with --block-until-deployed.",
)
@click.option(
    "--block-check-interval",
    type=int,
    default=DEFAULT_BLOCK_CHECK_INTERVAL,
    show_default=True,
    help="Seconds between deploy status checks with --block-until-deployed.",
)
@click.pass_context
def infrastructure_deploy(
    ctx,
    infrastructure_id_or_label,
    allow_data_loss,
    attempt_soft_shutdown,
    attempt_hard_shutdown,
    soft_shutdown_timeout,
    force_shutdown,
    autoconfirm,
    block_until_deployed,
    block_timeout,
    block_check_interval,
):
    """
    Deploy infrastructure

    Examples:
        metalcloud infrastructure deploy prod-cluster --autoconfirm
        metalcloud infra deploy 1234 --force-shutdown --block-until-deployed
        metalcloud infra apply 1234 --no-attempt-soft-shutdown --allow-data-loss
    """
    obj = ctx.find_object(dict) or {}
    cmd = InfrastructureDeployCommand(
        _config(ctx),
        infrastructure_id_or_label,
        allow_data_loss=allow_data_loss,
        attempt_soft_shutdown=attempt_soft_shutdown,
        attempt_hard_shutdown=attempt_hard_shutdown,
        soft_shutdown_timeout=soft_shutdown_timeout,
        force_shutdown=force_shutdown,
        autoconfirm=autoconfirm,
        block_until_deployed=block_until_deployed,
        block_timeout=block_timeout,
        block_check_interval=block_check_interval,
        clock=obj.get("clock"),
        **_command_kwargs(ctx),
    )
    cmd.run()
