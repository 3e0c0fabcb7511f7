import pytest

from paramfill.reflection import is_object_type_supported
from paramfill.test_utils import SpyEmitter


@pytest.fixture(autouse=True)
def reset_object_probe():
    # The probe result is cached process-wide; give every test a fresh probe
    is_object_type_supported.cache_clear()
    yield
    is_object_type_supported.cache_clear()


@pytest.fixture
def emitter() -> SpyEmitter:
    return SpyEmitter()
