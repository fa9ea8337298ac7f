"""kconf - join kubeconfig files into one destination kubeconfig."""

import logging
import sys
from pathlib import Path

import click

from .classifier import Classification
from .console import console
from .errors import KconfError
from .kubeconfig import load_kubeconfig
from .kubeconfig import load_or_create
from .kubeconfig import write_kubeconfig
from .logging_setup import init_json_logging
from .merger import merge_kubeconfig
from .models import KubeConfig
from .remover import remove_context_entries
from .settings import AppSettings
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message

logger = logging.getLogger(__name__)


def _report_classification(classification: Classification) -> None:
    for kind, partition in classification.partitions():
        for entry in partition.add:
            console.print(f"  [green]+[/green] {kind.value} {escape_markup(entry.name)}")
        for entry in partition.update:
            console.print(f"  [yellow]~[/yellow] {kind.value} {escape_markup(entry.name)} (updated)")
        for name in partition.skip:
            console.print(f"  [dim]= {kind.value} {escape_markup(name)} (exists, skipped)[/dim]")


def _remove(document: KubeConfig, context_name: str) -> int:
    console.print(f"Removing context: [cyan]{escape_markup(context_name)}[/cyan]")
    result = remove_context_entries(document, context_name)

    if not result.count:
        console.print(f"  [yellow]Context '{escape_markup(context_name)}' not found, nothing removed[/yellow]")
        return 0

    for kind, name in result.removed:
        console.print(f"  [red]-[/red] {kind.value} {escape_markup(name)}")
    if result.cleared_current_context:
        console.print("  [dim]current-context cleared[/dim]")
    console.print(f"  Removed {result.count} entr{'y' if result.count == 1 else 'ies'}")
    return result.count


def run_kconf(destination: Path, configs: tuple[Path, ...], remove_name: str | None, update: bool) -> None:
    """Remove, merge and write. Nothing is written unless every step succeeds."""
    console.print(f"Destination kubeconfig: [cyan]{escape_markup(destination)}[/cyan]")
    document = load_or_create(destination)

    removed = 0
    if remove_name is not None:
        removed = _remove(document, remove_name)

    if not configs and not removed:
        # Remove-only run that matched nothing: leave the file exactly as it is
        console.print(f"[dim]No changes, {escape_markup(destination)} left untouched[/dim]")
        return

    for config_path in configs:
        console.print(f"Processing: [cyan]{escape_markup(config_path)}[/cyan]")
        incoming = load_kubeconfig(config_path)

        classification, counts = merge_kubeconfig(document, incoming, update=update)
        _report_classification(classification)
        console.print(f"  {counts.added} added, {counts.updated} updated, {counts.skipped} skipped")
        logger.info(
            f"Merged {config_path}",
            extra={"event": "kconf:merged", "added": counts.added, "updated": counts.updated, "skipped": counts.skipped},
        )

    write_kubeconfig(destination, document)

    if configs:
        console.print(
            f"[green]✓[/green] Merged {len(configs)} config(s) into [cyan]{escape_markup(destination)}[/cyan]"
        )
    else:
        console.print(f"[green]✓[/green] Updated [cyan]{escape_markup(destination)}[/cyan]")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="kconf")
@click.argument("configs", nargs=-1, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--remove", "-r", "remove_name", metavar="CONTEXT", help="Remove a context and its unshared cluster/user")
@click.option("--update", "-u", is_flag=True, help="Replace entries that already exist instead of skipping them")
@click.option(
    "--destination",
    "-d",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Destination kubeconfig (overrides ~/.k8sconf/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
def cli(
    configs: tuple[Path, ...],
    remove_name: str | None,
    update: bool,
    destination: Path | None,
    verbose: bool,
):
    """Join kubeconfig files into the destination kubeconfig.

    Each CONFIGS file is merged in order. Clusters, contexts and users whose
    names already exist are skipped unless --update is given.
    """
    if not configs and remove_name is None:
        raise click.UsageError("Provide at least one kubeconfig to merge or --remove CONTEXT.")

    init_json_logging(level="DEBUG" if verbose else None)

    try:
        if destination is None:
            destination = AppSettings().get_destination()
        else:
            destination = destination.expanduser()
        run_kconf(destination, configs, remove_name, update)
    except KconfError as e:
        logger.error(format_error_message(e), extra={"event": "kconf:failed"})
        console.print(f"[red]Error:[/red] {escape_markup(format_error_message(e, include_type=False))}")
        sys.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
