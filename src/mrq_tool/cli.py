"""Marquee tool - create, edit and inspect .mrq files."""
from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from mrq_codec import MarqueeDocument, read_marquee, write_marquee
from mrq_core.errors import MarqueeError
from mrq_core.fields import display_text
from mrq_core.protocol import MAX_ADDRESS

from .images import load_image

__version__ = "0.1.0"

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


class AddressType(click.ParamType):
    """32-bit address written as hex with a 0x prefix, e.g. 0x00802000."""

    name = "ADDRESS"

    def convert(self, value, param, ctx):
        if isinstance(value, int):
            return value
        s = value.strip().lower()
        if not s.startswith("0x") or not 2 < len(s) <= 10:
            self.fail(f"{value!r} is not a hex address like 0x00802000", param, ctx)
        try:
            addr = int(s[2:], 16)
        except ValueError:
            self.fail(f"{value!r} is not a hex address like 0x00802000", param, ctx)
        if addr > MAX_ADDRESS:
            self.fail(f"{value!r} does not fit in 32 bits", param, ctx)
        return addr


ADDRESS = AddressType()
IMAGE_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


def edit_options(f):
    """Options shared by create and edit."""
    options = [
        click.option("--title", help="Set title to TITLE."),
        click.option("--developer", help="Set developer to DEVELOPER."),
        click.option("--publisher", help="Set publisher to PUBLISHER."),
        click.option("--year", help="Set year to YEAR."),
        click.option("--load-address", type=ADDRESS, help="Set load address to ADDRESS."),
        click.option("--exec-address", type=ADDRESS, help="Set exec address to ADDRESS."),
        click.option("--box", type=IMAGE_PATH, help="Set box art image to FILE."),
        click.option("--screenshot", type=IMAGE_PATH, help="Set screenshot image to FILE."),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def update_marquee(doc: MarqueeDocument, path: Path, **opts) -> None:
    """Apply the options that were given, then write the file."""
    for name, attr in (
        ("title", "title"),
        ("developer", "developer"),
        ("publisher", "publisher"),
        ("year", "year"),
        ("load_address", "load_addr"),
        ("exec_address", "exec_addr"),
    ):
        if opts.get(name) is not None:
            setattr(doc, attr, opts[name])

    if opts.get("box") is not None:
        doc.box = load_image(opts["box"])
    if opts.get("screenshot") is not None:
        doc.screenshot = load_image(opts["screenshot"])

    write_marquee(doc, path)


def fail(e: Exception) -> None:
    # Fail closed with a single-line reason.
    click.echo(f"FATAL: {e}", err=True)
    raise SystemExit(1)


@click.group()
@click.version_option(__version__, "-V", "--version")
@click.option("-v", "--verbose", is_flag=True, help="Log codec activity.")
def main(verbose: bool):
    """Manage .mrq Marquee files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("create")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@edit_options
def create_cmd(path: Path, **opts):
    """Create a new .mrq file."""
    try:
        update_marquee(MarqueeDocument(), path, **opts)
    except (MarqueeError, OSError) as e:
        fail(e)


@main.command("edit")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@edit_options
def edit_cmd(path: Path, **opts):
    """Edit an existing .mrq file."""
    try:
        update_marquee(read_marquee(path), path, **opts)
    except (MarqueeError, OSError) as e:
        fail(e)


@main.command("info")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Print canonical JSON.")
def info_cmd(path: Path, as_json: bool):
    """Show an existing .mrq file."""
    try:
        doc = read_marquee(path)
    except (MarqueeError, OSError) as e:
        fail(e)

    info = {k: display_text(v) for k, v in doc.info().items()}
    if as_json:
        click.echo(json.dumps(info, **CANONICAL_JSON_KW))
        return

    rows = [
        ("Title:", info["title"]),
        ("Developer:", info["developer"]),
        ("Publisher:", info["publisher"]),
        ("Year:", info["year"]),
    ]
    if doc.custom_load:
        rows.append(("Load Address:", info["load_addr"]))
        rows.append(("Exec Address:", info["exec_addr"]))

    width = max(len(label) for label, _ in rows)
    for label, value in rows:
        click.echo(f"{label:<{width}} {value}".rstrip())


if __name__ == "__main__":
    main()
