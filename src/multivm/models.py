"""Data models for multivm."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProvisioningRequest:
    """Validated description of one batch of VMs."""

    prefix: str
    start: int
    end: int
    cores: int
    sockets: int
    threads: int
    memory: str
    storage_class: str
    image_url: str

    @property
    def total_instances(self) -> int:
        """Number of VMs in the batch."""
        return self.end - self.start + 1

    @property
    def total_vcpus(self) -> int:
        """vCPUs per VM."""
        return self.cores * self.sockets * self.threads

    @property
    def indices(self) -> range:
        """Instance indices, start to end inclusive."""
        return range(self.start, self.end + 1)

    def instance_name(self, index: int) -> str:
        """Name of the VM created for ``index``."""
        return f"{self.prefix}-{index}"

    @property
    def first_name(self) -> str:
        return self.instance_name(self.start)

    @property
    def last_name(self) -> str:
        return self.instance_name(self.end)


@dataclass
class SubmissionResult:
    """Outcome of handing one manifest to the orchestrator client."""

    name: str
    succeeded: bool
    returncode: int | None = None
    error: str = ""


@dataclass
class BatchResult:
    """Outcome of a whole batch run."""

    submissions: list[SubmissionResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for s in self.submissions if s.succeeded)

    @property
    def failed(self) -> int:
        return len(self.submissions) - self.succeeded

    @property
    def failed_names(self) -> list[str]:
        """Names of VMs whose submission failed, in submission order."""
        return [s.name for s in self.submissions if not s.succeeded]
