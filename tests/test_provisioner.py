"""Tests for the sequential submitter."""

from unittest.mock import MagicMock

import yaml

from multivm.config import Settings
from multivm.models import ProvisioningRequest, SubmissionResult
from multivm.orchestrator_client import OrchestratorClient
from multivm.provisioner import Provisioner


def make_client(failing: set[str] | None = None) -> MagicMock:
    failing = failing or set()
    client = MagicMock(spec=OrchestratorClient)
    client.create.side_effect = lambda name, document: SubmissionResult(
        name=name, succeeded=name not in failing, returncode=1 if name in failing else 0
    )
    return client


class TestProvisioner:
    """Tests for Provisioner.run."""

    def test_submits_every_index_in_order(
        self, settings: Settings, request_three: ProvisioningRequest
    ) -> None:
        client = make_client()
        batch = Provisioner(settings, client, sleep=MagicMock()).run(request_three)

        names = [c.args[0] for c in client.create.call_args_list]
        assert names == ["test-1", "test-2", "test-3"]
        assert batch.succeeded == 3
        assert batch.failed == 0

    def test_submits_rendered_manifest(
        self, settings: Settings, request_three: ProvisioningRequest
    ) -> None:
        """Test the document handed to the client is the rendered VM."""
        client = make_client()
        Provisioner(settings, client, sleep=MagicMock()).run(request_three)

        document = client.create.call_args_list[1].args[1]
        manifest = yaml.safe_load(document)
        assert manifest["kind"] == "VirtualMachine"
        assert manifest["metadata"]["name"] == "test-2"

    def test_continues_after_failure(
        self, settings: Settings, request_three: ProvisioningRequest
    ) -> None:
        """Test a failed submission does not stop the batch."""
        client = make_client(failing={"test-2"})
        batch = Provisioner(settings, client, sleep=MagicMock()).run(request_three)

        assert client.create.call_count == 3
        assert batch.succeeded == 2
        assert batch.failed_names == ["test-2"]

    def test_sleeps_after_each_submission(self, request_three: ProvisioningRequest) -> None:
        """Test the fixed delay between submissions."""
        settings = Settings(submit_delay_seconds=1.5)
        client = make_client()
        events: list[str] = []
        client.create.side_effect = lambda name, document: (
            events.append(f"create {name}") or SubmissionResult(name=name, succeeded=True)
        )
        sleep = MagicMock(side_effect=lambda seconds: events.append(f"sleep {seconds}"))

        Provisioner(settings, client, sleep=sleep).run(request_three)

        assert events == [
            "create test-1",
            "sleep 1.5",
            "create test-2",
            "sleep 1.5",
            "create test-3",
            "sleep 1.5",
        ]

    def test_single_instance(self, settings: Settings, request_three: ProvisioningRequest) -> None:
        req = ProvisioningRequest(
            prefix="solo",
            start=7,
            end=7,
            cores=1,
            sockets=1,
            threads=1,
            memory="8Gi",
            storage_class="standard",
            image_url="http://images.example.com/f.qcow2",
        )
        client = make_client()
        batch = Provisioner(settings, client, sleep=MagicMock()).run(req)

        client.create.assert_called_once()
        assert client.create.call_args.args[0] == "solo-7"
        assert len(batch.submissions) == 1
