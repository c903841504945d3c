"""
Print the sequence of a genomic region as JSON.

Usage:
```
python3 -m seqslice.scripts.get_sequence ORGANISM LOCATION [--backend indexed|binned] [--base-dir DIR]
```

For example, ``python3 -m seqslice.scripts.get_sequence homo_sapiens 1:10001..10100:-1``. The output has the same
shape as the HTTP API's response: ``{"molecule": "dna", "query": ..., "id": ..., "seq": ...}`` on success and
``{"error": ...}`` with a non-zero exit status on failure.
"""

import json
import logging
import time

import click

from seqslice.lib.exceptions import SequenceQueryError
from seqslice.lib.logging.canonical import log_command
from seqslice.lib.query import QueryService
from seqslice.lib.registry import SequenceIndexRegistry
from seqslice.scripts.environment import script_environment, with_sequence_registry
from seqslice.settings.constants import MAX_QUERY_LENGTH

logger = logging.getLogger(__name__)


@script_environment.command()
@click.argument("organism")
@click.argument("location")
@click.option("--max-length", type=int, default=MAX_QUERY_LENGTH, show_default=True, help="Largest range to return")
@with_sequence_registry
async def get_sequence(registry: SequenceIndexRegistry, organism: str, location: str, max_length: int):
    service = QueryService(registry, max_length)
    log_context = {"requested_organism": organism, "requested_location": location, "sequence_backend": registry.kind}

    start = time.time_ns()
    try:
        result = await service.handle(organism, location)

    except SequenceQueryError as e:
        log_command("get_sequence", {**log_context, "query_error_code": e.code}, False, start, time.time_ns())
        click.echo(json.dumps({"error": e.message}))
        raise click.exceptions.Exit(1)

    log_command("get_sequence", {**log_context, "sequence_length": len(result.seq)}, True, start, time.time_ns())
    click.echo(json.dumps(result.as_dict()))


if __name__ == "__main__":
    get_sequence()
