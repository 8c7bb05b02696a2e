"""Command Line Interface"""

from pathlib import Path
from typing import List

import click
import simplejson as json

from beatmapcheck.check import check_folder
from beatmapcheck.context import ExtractedInfo
from beatmapcheck.files import DIFFICULTY_SIZE_LIMIT
from beatmapcheck.violations import ConstraintViolation


@click.command()
@click.argument("folder", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print the report as a JSON document",
)
@click.option(
    "--size-limit",
    "size_limit",
    type=click.IntRange(min=1),
    default=DIFFICULTY_SIZE_LIMIT,
    show_default=True,
    help="Bytes read from Info.dat and each difficulty file, the rest is ignored",
)
def check(folder: str, as_json: bool, size_limit: int) -> None:
    """Validate the extracted map package in FOLDER"""
    info, violations = check_folder(Path(folder), size_limit=size_limit)
    if as_json:
        click.echo(render_json(info, violations))
    else:
        for violation in violations:
            click.echo(str(violation))
        click.echo(f"{len(violations)} problem(s) found")

    if violations:
        raise SystemExit(1)


def render_json(info: ExtractedInfo, violations: List[ConstraintViolation]) -> str:
    report = {
        "hash": info.hexdigest,
        "duration": info.duration,
        "violations": [
            {
                "property": v.property,
                "value": v.value,
                "constraint": v.constraint.value,
            }
            for v in violations
        ],
    }
    return str(json.dumps(report, indent=4, default=repr))


if __name__ == "__main__":
    check()
