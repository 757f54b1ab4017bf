"""Sequential submission of a batch of VirtualMachines."""

import time
from collections.abc import Callable

import structlog

from .config import Settings
from .manifest import dump_manifest, render_manifest
from .models import BatchResult, ProvisioningRequest, SubmissionResult
from .orchestrator_client import OrchestratorClient

logger = structlog.get_logger()


class Provisioner:
    """Renders and submits one manifest per instance, one at a time.

    A failed submission does not stop the batch and nothing is rolled back:
    VMs created before a failure stay in the cluster.
    """

    def __init__(
        self,
        settings: Settings,
        client: OrchestratorClient,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings
        self.client = client
        self._sleep = sleep

    def submit_one(self, request: ProvisioningRequest, index: int) -> SubmissionResult:
        """Render and submit the VM for ``index``."""
        name = request.instance_name(index)
        document = dump_manifest(render_manifest(request, index, self.settings))
        logger.info("Creating VM", name=name, namespace=self.settings.namespace)
        return self.client.create(name, document)

    def run(self, request: ProvisioningRequest) -> BatchResult:
        """Create every VM in ``request``, pausing after each submission."""
        batch = BatchResult()
        for index in request.indices:
            result = self.submit_one(request, index)
            batch.submissions.append(result)
            if not result.succeeded:
                logger.error("VM creation failed, continuing", name=result.name, error=result.error)
            self._sleep(self.settings.submit_delay_seconds)

        logger.info(
            "Batch complete",
            total=request.total_instances,
            succeeded=batch.succeeded,
            failed=batch.failed,
        )
        return batch
