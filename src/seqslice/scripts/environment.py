"""
Environment setup for scripts.
"""

import asyncio
import logging
from functools import wraps

import click

from seqslice import deps
from seqslice.lib.registry import SequenceIndexRegistry
from seqslice.settings.constants import SEQUENCE_BACKEND, SEQUENCE_BACKENDS, SEQUENCE_BASE_DIR

logger = logging.getLogger(__name__)


@click.group()
def script_environment():
    """
    Set up the environment for a script that may be run from the command line and does not depend on the
    FastAPI application.
    """

    logging.basicConfig()
    logging.getLogger("__main__").setLevel(logging.INFO)


def with_sequence_registry(command=None):
    """
    Decorator to provide a :py:class:`SequenceIndexRegistry` to an asynchronous *command*.

    The *command* must be a coroutine function. It is called with a ``registry``
    keyword argument, built from the ``--backend`` and ``--base-dir`` options
    added here, and run to completion on a fresh event loop. The registry's
    stores are closed once the command finishes, whether or not it succeeded.

    >>> @click.command
    ... @with_sequence_registry
    ... async def cmd(registry: SequenceIndexRegistry):
    ...     pass
    """

    def decorator(command):
        @click.option(
            "--backend",
            type=click.Choice(SEQUENCE_BACKENDS),
            default=SEQUENCE_BACKEND,
            show_default=True,
            help="Sequence store to read from",
        )
        @click.option(
            "--base-dir",
            type=click.Path(file_okay=False),
            default=SEQUENCE_BASE_DIR,
            show_default=True,
            help="Directory holding one sub-directory per organism (indexed backend only)",
        )
        @wraps(command)
        def decorated(*args, backend, base_dir, **kwargs):
            registry = SequenceIndexRegistry(deps.build_locator(backend, base_dir))

            async def run():
                try:
                    return await command(*args, registry=registry, **kwargs)
                finally:
                    await registry.reset()

            return asyncio.run(run())

        return decorated

    return decorator(command) if command else decorator
