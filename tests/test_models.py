"""Tests for data models."""

import dataclasses

import pytest

from multivm.models import BatchResult, ProvisioningRequest, SubmissionResult


class TestProvisioningRequest:
    """Tests for ProvisioningRequest model."""

    @pytest.mark.parametrize(("start", "end"), [(1, 1), (1, 10), (5, 7), (0, 3)])
    def test_total_instances(self, request_three: ProvisioningRequest, start: int, end: int) -> None:
        """Test total instance count is end - start + 1."""
        req = dataclasses.replace(request_three, start=start, end=end)
        assert req.total_instances == end - start + 1
        assert len(req.indices) == req.total_instances

    @pytest.mark.parametrize(("cores", "sockets", "threads"), [(1, 1, 1), (2, 2, 1), (4, 2, 2), (8, 1, 2)])
    def test_total_vcpus(
        self, request_three: ProvisioningRequest, cores: int, sockets: int, threads: int
    ) -> None:
        """Test vCPU count is cores x sockets x threads."""
        req = dataclasses.replace(request_three, cores=cores, sockets=sockets, threads=threads)
        assert req.total_vcpus == cores * sockets * threads

    def test_instance_names(self, request_three: ProvisioningRequest) -> None:
        """Test instance naming."""
        assert request_three.instance_name(3) == "test-3"
        assert request_three.first_name == "test-1"
        assert request_three.last_name == "test-3"
        assert list(request_three.indices) == [1, 2, 3]

    def test_is_immutable(self, request_three: ProvisioningRequest) -> None:
        """Test that a request cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            request_three.prefix = "other"  # type: ignore[misc]


class TestBatchResult:
    """Tests for BatchResult model."""

    def test_empty(self) -> None:
        batch = BatchResult()
        assert batch.succeeded == 0
        assert batch.failed == 0
        assert batch.failed_names == []

    def test_counts_and_failed_names(self) -> None:
        """Test success and failure accounting."""
        batch = BatchResult(
            submissions=[
                SubmissionResult(name="vm-1", succeeded=True, returncode=0),
                SubmissionResult(name="vm-2", succeeded=False, returncode=1),
                SubmissionResult(name="vm-3", succeeded=True, returncode=0),
                SubmissionResult(name="vm-4", succeeded=False, error="not found"),
            ]
        )
        assert batch.succeeded == 2
        assert batch.failed == 2
        assert batch.failed_names == ["vm-2", "vm-4"]
