"""Service test fixtures — counting fake store, assembler, mutator.

Invariants:
    - Every test gets a fresh FakeStore (no shared call log)
    - assembler uses the default DROP policy and no deadline
"""

import pytest

from registrar.services.association_mutator import AssociationMutator
from registrar.services.graph_assembler import GraphAssembler
from tests.services.fake_store import FakeStore


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def assembler(store):
    return GraphAssembler(store)


@pytest.fixture
def mutator(store, assembler):
    return AssociationMutator(store, assembler)
