import fakeredis
import fakeredis.aioredis
import pytest
from fastapi.testclient import TestClient

from seqslice import deps
from seqslice.lib.query import QueryService
from seqslice.lib.registry import SequenceIndexRegistry
from seqslice.lib.stores import BinnedKeyValueLocator, FastaIndexLocator
from seqslice.server_main import app

from tests.helpers.constants import TEST_BIN_SIZE, TEST_ORGANISM, TEST_SEQUENCES
from tests.helpers.util import write_bins, write_indexed_fasta



####################################################################################################
# INDEXED FASTA
####################################################################################################


@pytest.fixture
def sequence_dir(tmp_path):
    """
    A base directory laid out like production data, holding one organism:

    ```
    <tmp>/fasta/demo/dna/Demo_organism.demo1.dna.toplevel.fa.gz{,.fai,.gzi}
    ```
    """
    base_dir = tmp_path / "fasta"
    write_indexed_fasta(base_dir / TEST_ORGANISM / "dna", TEST_SEQUENCES)
    return base_dir


@pytest.fixture
def fasta_locator(sequence_dir):
    return FastaIndexLocator(str(sequence_dir))


@pytest.fixture
def indexed_registry(fasta_locator):
    return SequenceIndexRegistry(fasta_locator)


@pytest.fixture
def query_service(indexed_registry):
    return QueryService(indexed_registry)


####################################################################################################
# BINNED REDIS
####################################################################################################


@pytest.fixture
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
def binned_data(redis_server):
    """
    Store the test sequences in bins of ``TEST_BIN_SIZE`` bases.
    """
    redis = fakeredis.FakeRedis(server=redis_server)
    write_bins(redis, TEST_ORGANISM, TEST_SEQUENCES, TEST_BIN_SIZE)
    return redis


@pytest.fixture
def async_redis(redis_server, binned_data):
    # Connections are opened lazily, inside whichever event loop first uses the client.
    return fakeredis.aioredis.FakeRedis(server=redis_server)


@pytest.fixture
def binned_locator(async_redis):
    return BinnedKeyValueLocator(async_redis, TEST_BIN_SIZE)


@pytest.fixture
def binned_registry(binned_locator):
    return SequenceIndexRegistry(binned_locator)


####################################################################################################
# FASTAPI CLIENT
####################################################################################################


@pytest.fixture()
def app_(indexed_registry):
    app.dependency_overrides[deps.get_registry] = lambda: indexed_registry

    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(app_):
    with TestClient(app=app_, base_url="http://testserver") as tc:
        yield tc
