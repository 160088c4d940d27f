"""Fixtures for service tests.

Services share one InMemoryFileStore per test; fixtures are function
scoped so every test starts from an empty vault.
"""

import pytest

from notecanvas.services import (
    BacklinkWriter,
    CanvasOperator,
    EdgeSynchronizer,
    FileCreator,
    SectionExtractionService,
)


@pytest.fixture
def backlink_writer(memory_store):
    return BacklinkWriter(memory_store)


@pytest.fixture
def marker_writer(memory_store):
    """Backlink writer that prefixes bullets with direction markers."""
    return BacklinkWriter(memory_store, direction_markers=True)


@pytest.fixture
def synchronizer(memory_store):
    return EdgeSynchronizer(memory_store, section_name="Connections")


@pytest.fixture
def file_creator(memory_store, extraction_config):
    return FileCreator(memory_store, extraction_config)


@pytest.fixture
def canvas_operator(memory_store, canvas_config):
    return CanvasOperator(memory_store, canvas_config)


@pytest.fixture
def extraction_service(memory_store, extraction_config, file_creator, canvas_operator):
    return SectionExtractionService(
        memory_store,
        config=extraction_config,
        file_creator=file_creator,
        canvas_operator=canvas_operator,
    )
