"""Wrapper around the orchestrator command-line client."""

import subprocess

import structlog

from .config import Settings
from .models import SubmissionResult

logger = structlog.get_logger()


class OrchestratorClient:
    """Creates cluster resources by piping manifests into ``<client> create -f -``."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def create_command(self) -> list[str]:
        return [self.settings.client_binary, "create", "-f", "-"]

    def create(self, name: str, document: str) -> SubmissionResult:
        """
        Submit one manifest.

        The client's stdout and stderr are left attached to the terminal so
        its own messages reach the operator. No timeout is applied.

        Args:
            name: Resource name, used for reporting only
            document: Manifest text fed to the client on stdin

        Returns:
            SubmissionResult describing the client's exit status
        """
        try:
            result = subprocess.run(self.create_command, input=document, text=True)
        except OSError as e:
            logger.error(
                "Failed to run orchestrator client",
                name=name,
                client=self.settings.client_binary,
                error=str(e),
            )
            return SubmissionResult(name=name, succeeded=False, error=str(e))

        if result.returncode != 0:
            logger.warning("Orchestrator client reported failure", name=name, returncode=result.returncode)
            return SubmissionResult(
                name=name,
                succeeded=False,
                returncode=result.returncode,
                error=f"{self.settings.client_binary} exited with status {result.returncode}",
            )

        logger.debug("Submitted manifest", name=name)
        return SubmissionResult(name=name, succeeded=True, returncode=0)
