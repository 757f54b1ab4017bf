"""CLI entrypoint for multivm.

Creates a numbered batch of KubeVirt VirtualMachines, one ``oc create`` at a
time:

    multivm -p test -s 1 -e 10     # test-1 .. test-10
    multivm -p worker -c 5         # worker-1 .. worker-5
    multivm 10                     # vm-1 .. vm-10 (legacy mode)
"""

import sys
import time
from typing import List, Optional

import click
import pydantic
import typer
from rich.console import Console
from rich.markup import escape

from .config import Settings, get_settings
from .logging_config import configure_logging
from .manifest import BOOT_DISK_SIZE, DATA_DISK_SIZE
from .models import BatchResult, ProvisioningRequest
from .orchestrator_client import OrchestratorClient
from .provisioner import Provisioner
from .validation import RawArguments, ValidationError, build_request, is_number

PROG_NAME = "multivm"

USAGE = f"""\
Usage: {PROG_NAME} [OPTIONS] [COUNT]

Options:
  -p, --prefix PREFIX    VM name prefix (default: vm)
  -s, --start NUMBER     Starting VM number (default: 1)
  -e, --end NUMBER       Ending VM number (default: 1)
  -c, --count NUMBER     Number of VMs to create (alternative to --end)
  --cores NUMBER         CPU cores per socket (default: 2)
  --sockets NUMBER       Number of CPU sockets (default: 2)
  --threads NUMBER       CPU threads per core (default: 1)
  --memory SIZE          Memory size with unit (default: 12Gi)
  --storageclass NAME    Storage class for VM disks (default: $MULTIVM_STORAGE_CLASS)
  --imageurl URL         Boot disk image URL (default: $MULTIVM_IMAGE_URL)
  -h, --help             Show this help message

Examples:
  {PROG_NAME} -p test -s 1 -e 10                    # Creates test-1 to test-10
  {PROG_NAME} -p worker -c 5                        # Creates worker-1 to worker-5
  {PROG_NAME} -p db --cores 4 --memory 16Gi -c 3    # Creates db-1 to db-3 with 4 cores, 16Gi RAM
  {PROG_NAME} -p app --sockets 1 --cores 8 -c 2     # Creates app-1 to app-2 with 1 socket, 8 cores
  {PROG_NAME} 10                                    # Creates vm-1 to vm-10 (legacy mode)

CPU Configuration:
  Total vCPUs = cores × sockets × threads
  Default: 2 cores × 2 sockets × 1 thread = 4 vCPUs

Memory Examples:
  8Gi, 12Gi, 16Gi, 32Gi, 64Gi

Note: a bare number without options is treated as the count (legacy mode)
"""

app = typer.Typer(
    name=PROG_NAME,
    help="Create a batch of KubeVirt VirtualMachines",
    add_completion=False,
)
console = Console(soft_wrap=True, highlight=False, emoji=False)


def print_usage() -> None:
    console.print(USAGE, markup=False)


def print_summary(request: ProvisioningRequest, settings: Settings) -> None:
    """Print what is about to be created."""
    prefix = escape(request.prefix)
    cpu = f"{request.cores} cores × {request.sockets} sockets × {request.threads} threads"

    console.print("==========================================")
    console.print("[bold]    VM Creation Summary[/bold]")
    console.print("==========================================")
    console.print(f"Prefix:        {prefix}")
    console.print(f"Range:         {escape(request.first_name)} to {escape(request.last_name)}")
    console.print(f"Total VMs:     {request.total_instances}")
    console.print(f"CPU Config:    {cpu} = {request.total_vcpus} vCPUs")
    console.print(f"Memory:        {escape(request.memory)} per VM")
    console.print(f"Namespace:     {escape(settings.namespace)}")
    console.print(f"Storage Class: {escape(request.storage_class)}")
    console.print(f"Image URL:     {escape(request.image_url)}")
    console.print("")
    console.print("VM Specifications:")
    console.print(f"  • CPU: {request.total_vcpus} vCPUs ({cpu})")
    console.print(f"  • Memory: {escape(request.memory)} RAM")
    console.print(f"  • OS Disk: {BOOT_DISK_SIZE} (from image URL)")
    console.print(f"  • Data Disk: {DATA_DISK_SIZE} (blank)")
    console.print("")


def print_result(request: ProvisioningRequest, batch: BatchResult, settings: Settings) -> None:
    """Print the closing report for a finished batch."""
    console.print("")
    console.print(
        f"✅ Successfully created {request.total_instances} VMs: "
        f"{escape(request.first_name)} to {escape(request.last_name)}"
    )
    if batch.failed:
        console.print(
            f"⚠️  {batch.failed} submission(s) reported errors: {escape(', '.join(batch.failed_names))}"
        )
    console.print(
        f"You can check the status with: {escape(settings.client_binary)} get vms "
        f"-n {escape(settings.namespace)} | grep {escape(request.prefix)}"
    )


@app.command(add_help_option=False)
def create(
    legacy_count: Optional[str] = typer.Argument(None, metavar="[COUNT]", show_default=False),
    prefix: str = typer.Option("vm", "-p", "--prefix"),
    start: str = typer.Option("1", "-s", "--start"),
    end: str = typer.Option("1", "-e", "--end"),
    count: Optional[str] = typer.Option(None, "-c", "--count"),
    cores: str = typer.Option("2", "--cores"),
    sockets: str = typer.Option("2", "--sockets"),
    threads: str = typer.Option("1", "--threads"),
    memory: str = typer.Option("12Gi", "--memory"),
    storage_class: Optional[str] = typer.Option(None, "--storageclass"),
    image_url: Optional[str] = typer.Option(None, "--imageurl"),
    show_help: bool = typer.Option(False, "-h", "--help"),
) -> int:
    """Create VMs {prefix}-{start} through {prefix}-{end}."""
    if legacy_count is not None:
        if not is_number(legacy_count):
            console.print(f"Invalid argument: {escape(legacy_count)}")
            print_usage()
            return 1
        if count is None:
            count = legacy_count

    if show_help:
        print_usage()
        return 0

    try:
        settings = get_settings()
    except pydantic.ValidationError as e:
        console.print(f"Error: invalid configuration: {escape(str(e))}")
        return 1
    configure_logging(settings.log_level)

    raw = RawArguments(
        prefix=prefix,
        start=start,
        end=end,
        count=count,
        cores=cores,
        sockets=sockets,
        threads=threads,
        memory=memory,
        storage_class=settings.storage_class if storage_class is None else storage_class,
        image_url=settings.image_url if image_url is None else image_url,
    )
    try:
        request = build_request(raw)
    except ValidationError as e:
        console.print(f"Error: {escape(str(e))}")
        print_usage()
        return 1

    print_summary(request, settings)
    delay = settings.startup_delay_seconds
    console.print(f"Starting VM creation in {delay:g} seconds...")
    console.print("Press Ctrl+C to cancel...")
    time.sleep(delay)

    provisioner = Provisioner(settings, OrchestratorClient(settings))
    batch = provisioner.run(request)

    print_result(request, batch, settings)
    return 0


PAIRED_OPTIONS = {
    "-p", "--prefix",
    "-s", "--start",
    "-e", "--end",
    "-c", "--count",
    "--cores", "--sockets", "--threads", "--memory",
    "--storageclass", "--imageurl",
}
HELP_OPTIONS = {"-h", "--help"}


def requests_help(argv: List[str]) -> bool:
    """Return True if a help flag comes before any token that would be rejected.

    Tokens are read left to right, skipping the value after each paired
    option, so ``-h --bogus`` is a help request while ``--bogus -h`` is not.
    """
    tokens = iter(argv)
    for token in tokens:
        if token in HELP_OPTIONS:
            return True
        if token in PAIRED_OPTIONS:
            next(tokens, None)
        elif token.startswith("--") and token.split("=", 1)[0] in PAIRED_OPTIONS:
            continue
        elif token[:2] in PAIRED_OPTIONS and len(token) > 2 and not token.startswith("--"):
            continue
        elif not is_number(token):
            return False
    return False


def main(argv: Optional[List[str]] = None) -> int:
    """Parse ``argv`` (default: ``sys.argv[1:]``) and run; returns the exit code."""
    if argv is None:
        argv = sys.argv[1:]
    if requests_help(argv):
        print_usage()
        return 0

    command = typer.main.get_command(app)
    try:
        return command.main(args=argv, prog_name=PROG_NAME, standalone_mode=False)
    except click.UsageError as e:
        console.print(e.format_message(), markup=False)
        print_usage()
        return 1
    except click.exceptions.Abort:
        console.print("Aborted.")
        return 130


def run() -> None:
    """Console script entrypoint."""
    sys.exit(main())


if __name__ == "__main__":
    run()
