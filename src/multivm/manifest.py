"""Rendering of KubeVirt VirtualMachine manifests."""

from typing import Any

import yaml

from .config import Settings
from .models import ProvisioningRequest

API_VERSION = "kubevirt.io/v1"
KIND = "VirtualMachine"

BOOT_DISK_SIZE = "10Gi"
DATA_DISK_SIZE = "50Gi"
TERMINATION_GRACE_PERIOD_SECONDS = 180


class ManifestDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.Node:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


ManifestDumper.add_representer(str, _represent_str)


def cloud_init_user_data(settings: Settings) -> str:
    """Cloud-config enabling password login for root."""
    config = {
        "user": "root",
        "password": settings.root_password,
        "chpasswd": {"expire": False},
        "disable_root": False,
    }
    body = yaml.dump(config, Dumper=ManifestDumper, sort_keys=False, default_flow_style=False)
    return "#cloud-config\n" + body


def _data_volume_template(name: str, size: str, storage_class: str, source: dict[str, Any]) -> dict[str, Any]:
    return {
        "metadata": {"name": name},
        "spec": {
            "pvc": {
                "accessModes": ["ReadWriteOnce"],
                "resources": {"requests": {"storage": size}},
                "storageClassName": storage_class,
                "volumeMode": "Block",
            },
            "source": source,
        },
    }


def render_manifest(request: ProvisioningRequest, index: int, settings: Settings) -> dict[str, Any]:
    """Build the VirtualMachine manifest for instance ``index`` of ``request``.

    The result depends only on its arguments. Two data volumes are attached:
    a boot volume imported from the request's image URL and a blank data
    volume, both provisioned from the request's storage class.
    """
    name = request.instance_name(index)
    boot_volume = name
    data_volume = f"{name}-data"
    boot_disk = f"{name}-boot-disk"
    data_disk = f"{name}-data-disk"

    return {
        "apiVersion": API_VERSION,
        "kind": KIND,
        "metadata": {
            "name": name,
            "namespace": settings.namespace,
        },
        "spec": {
            "dataVolumeTemplates": [
                _data_volume_template(
                    boot_volume,
                    BOOT_DISK_SIZE,
                    request.storage_class,
                    {"http": {"url": request.image_url}},
                ),
                _data_volume_template(
                    data_volume,
                    DATA_DISK_SIZE,
                    request.storage_class,
                    {"blank": {}},
                ),
            ],
            "runStrategy": "Always",
            "template": {
                "metadata": {
                    "annotations": {
                        "vm.kubevirt.io/flavor": "large",
                        "vm.kubevirt.io/os": "fedora",
                        "vm.kubevirt.io/workload": "server",
                    },
                    "labels": {
                        "flavor.template.kubevirt.io/large": "true",
                        "kubevirt.io/domain": name,
                        "kubevirt.io/size": "large",
                        "vm.kubevirt.io/name": name,
                    },
                },
                "spec": {
                    "accessCredentials": [
                        {
                            "sshPublicKey": {
                                "propagationMethod": {"noCloud": {}},
                                "source": {"secret": {"secretName": settings.ssh_secret_name}},
                            }
                        }
                    ],
                    "domain": {
                        "cpu": {
                            "cores": request.cores,
                            "sockets": request.sockets,
                            "threads": request.threads,
                        },
                        "devices": {
                            "disks": [
                                {"disk": {"bus": "virtio"}, "name": "cloudinitdisk"},
                                {"disk": {"bus": "virtio"}, "name": boot_disk, "bootOrder": 1},
                                {"disk": {"bus": "virtio"}, "name": data_disk},
                            ],
                            "inputs": [{"bus": "virtio", "name": "tablet", "type": "tablet"}],
                            "interfaces": [
                                {"masquerade": {}, "model": "virtio", "name": "default"}
                            ],
                            "networkInterfaceMultiqueue": True,
                            "rng": {},
                        },
                        "resources": {"requests": {"memory": request.memory}},
                    },
                    "evictionStrategy": "None",
                    "hostname": name,
                    "networks": [{"name": "default", "pod": {}}],
                    "terminationGracePeriodSeconds": TERMINATION_GRACE_PERIOD_SECONDS,
                    "volumes": [
                        {
                            "cloudInitNoCloud": {"userData": cloud_init_user_data(settings)},
                            "name": "cloudinitdisk",
                        },
                        {"dataVolume": {"name": boot_volume}, "name": boot_disk},
                        {"dataVolume": {"name": data_volume}, "name": data_disk},
                    ],
                },
            },
        },
    }


def dump_manifest(manifest: dict[str, Any]) -> str:
    """Serialize a manifest to YAML, keeping key order."""
    return yaml.dump(manifest, Dumper=ManifestDumper, sort_keys=False, default_flow_style=False)
