"""Validation of raw command-line values into a ProvisioningRequest."""

import re
from dataclasses import dataclass

from .models import ProvisioningRequest

NUMBER_PATTERN = re.compile(r"^[0-9]+$")
MEMORY_PATTERN = re.compile(r"^[0-9]+Gi$")


class ValidationError(ValueError):
    """Raised when a command-line value is syntactically fine but unusable."""


@dataclass(frozen=True)
class RawArguments:
    """Option values exactly as they were given on the command line."""

    prefix: str = "vm"
    start: str = "1"
    end: str = "1"
    count: str | None = None
    cores: str = "2"
    sockets: str = "2"
    threads: str = "1"
    memory: str = "12Gi"
    storage_class: str = ""
    image_url: str = ""


def is_number(value: str | None) -> bool:
    """Return True if ``value`` is a non-negative integer literal."""
    return value is not None and NUMBER_PATTERN.fullmatch(value) is not None


def is_valid_memory(value: str) -> bool:
    """Return True if ``value`` is a whole number of gibibytes, e.g. ``12Gi``."""
    return MEMORY_PATTERN.fullmatch(value) is not None


def resolve_end(raw: RawArguments) -> str:
    """Return the end index, derived from the count when one was given.

    A non-numeric count or start leaves the end untouched; the numeric check
    in :func:`build_request` reports it.
    """
    if raw.count is None:
        return raw.end
    if is_number(raw.start) and is_number(raw.count):
        return str(int(raw.start) + int(raw.count) - 1)
    return raw.end


def build_request(raw: RawArguments) -> ProvisioningRequest:
    """Validate ``raw`` and build the request.

    Rules are checked in a fixed order and the first one violated is raised
    as :class:`ValidationError`.
    """
    end = resolve_end(raw)

    if not is_number(raw.start) or not is_number(end):
        raise ValidationError("Start and end must be positive integers")
    if raw.count is not None and not is_number(raw.count):
        raise ValidationError("Start and end must be positive integers")

    start_index, end_index = int(raw.start), int(end)
    if start_index > end_index:
        raise ValidationError(
            f"Start number ({start_index}) cannot be greater than end number ({end_index})"
        )

    cpu = (raw.cores, raw.sockets, raw.threads)
    if not all(is_number(value) for value in cpu):
        raise ValidationError("CPU cores, sockets, and threads must be positive integers")
    if any(int(value) < 1 for value in cpu):
        raise ValidationError("CPU cores, sockets, and threads must be at least 1")

    if not is_valid_memory(raw.memory):
        raise ValidationError(
            "Memory must be specified with Gi suffix (e.g., 8Gi, 12Gi, 16Gi)"
        )

    return ProvisioningRequest(
        prefix=raw.prefix,
        start=start_index,
        end=end_index,
        cores=int(raw.cores),
        sockets=int(raw.sockets),
        threads=int(raw.threads),
        memory=raw.memory,
        storage_class=raw.storage_class,
        image_url=raw.image_url,
    )
