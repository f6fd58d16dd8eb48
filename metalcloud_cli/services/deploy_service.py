"""
Deploy Orchestration Service

Confirmation, dispatch and optional blocking wait for infrastructure
deploys, plus the confirmation-guarded revert.
"""

from typing import Optional

from metalcloud_cli.core.confirmation import (
    ConfirmationGuard,
    deploy_message,
    revert_message,
)
from metalcloud_cli.core.poller import (
    BlockingPoller,
    Clock,
    PollResult,
    validate_blocking_parameters,
)
from metalcloud_cli.exceptions import (
    DeployFailedError,
    DeployTimeoutError,
)
from metalcloud_cli.models.infrastructure import (
    BlockingOptions,
    DeployOutcome,
    DeployRequest,
    Infrastructure,
)
from .infrastructure_service import InfrastructureService


class DeployOrchestrator:
    """
    Blocking deploy orchestrator.

    Flow for one deploy:
    1. validate blocking parameters (before any remote call)
    2. resolve the infrastructure (the only read before confirmation)
    3. confirmation gate
    4. dispatch exactly one deploy request
    5. optionally poll until finished, failed or timed out
    """

    def __init__(
        self,
        client,
        guard: ConfirmationGuard,
        clock: Optional[Clock] = None,
        logger=None,
    ):
        self.client = client
        self.guard = guard
        self.clock = clock or Clock()
        self.logger = logger
        self.infrastructure_service = InfrastructureService(client, logger=logger)
        self.last_poll: Optional[PollResult] = None
        self.outcome: Optional[DeployOutcome] = None

    def deploy(
        self, request: DeployRequest, blocking: Optional[BlockingOptions] = None
    ) -> str:
        """
        Deploy an infrastructure.

        Args:
            request: Target, shutdown policy and guards
            blocking: Wait options (no wait when omitted)

        Returns:
            Output text (empty on success)

        Raises:
            ValidationError: Invalid blocking parameters or identifier
            NotConfirmedError: Confirmation denied
            TransportError: API communication failed
            DeployFailedError: API reported a failed deploy
            DeployTimeoutError: Gave up waiting
        """
        blocking = blocking or BlockingOptions()
        if blocking.block_until_deployed:
            validate_blocking_parameters(
                blocking.timeout_seconds, blocking.check_interval_seconds
            )

        if self.logger:
            self.logger.step("Resolving infrastructure")
        infrastructure = self.infrastructure_service.resolve(request.infrastructure)
        if self.logger:
            self.logger.success(
                f"Infrastructure {infrastructure.label} ({infrastructure.id})"
            )

        if not request.confirmed:
            self.guard.require(deploy_message(infrastructure.label, infrastructure.id))

        self._dispatch(infrastructure, request)
        self.outcome = DeployOutcome.DISPATCHED

        if not blocking.block_until_deployed:
            return ""

        self._wait(infrastructure, blocking)
        return ""

    def _dispatch(self, infrastructure: Infrastructure, request: DeployRequest) -> None:
        policy = request.shutdown_policy
        if self.logger:
            self.logger.step("Starting deploy")
            self.logger.log(
                f"Shutdown policy: soft={policy.attempt_soft} "
                f"hard={policy.hard_after_timeout} timeout={policy.soft_timeout_seconds}s "
                f"forced={policy.forced}; allow data loss={request.allow_data_loss}",
                "DEBUG",
            )
            if request.allow_data_loss:
                self.logger.warning("Data loss allowed for this deploy")

        self.client.deploy_infrastructure(
            infrastructure.id, policy, request.allow_data_loss
        )

        if self.logger:
            self.logger.success("Deploy accepted")

    def _wait(self, infrastructure: Infrastructure, blocking: BlockingOptions) -> None:
        if self.logger:
            self.logger.step(
                f"Waiting for deploy (timeout {blocking.timeout_seconds}s, "
                f"every {blocking.check_interval_seconds}s)"
            )

        poller = BlockingPoller(
            lambda: self.client.get_deploy_status(infrastructure.id),
            timeout_seconds=blocking.timeout_seconds,
            check_interval_seconds=blocking.check_interval_seconds,
            clock=self.clock,
            logger=self.logger,
        )
        result = poller.wait()
        self.last_poll = result
        self.outcome = result.outcome

        if result.outcome == DeployOutcome.SUCCEEDED:
            if self.logger:
                self.logger.success(
                    f"Deploy finished after {result.elapsed_seconds:.0f}s"
                )
            return

        if result.outcome == DeployOutcome.FAILED:
            raise DeployFailedError(infrastructure.id, result.reason)

        raise DeployTimeoutError(infrastructure.id, blocking.timeout_seconds)

    def revert(self, infrastructure_id_or_label: str) -> str:
        """
        Revert an infrastructure to its deployed state after confirmation.

        Raises:
            NotConfirmedError: Confirmation denied
        """
        infrastructure = self.infrastructure_service.resolve(infrastructure_id_or_label)

        self.guard.require(revert_message(infrastructure.label, infrastructure.id))

        if self.logger:
            self.logger.step(f"Reverting infrastructure {infrastructure.id}")
        self.client.revert_infrastructure(infrastructure.id)
        if self.logger:
            self.logger.success("Revert accepted")
        return ""
