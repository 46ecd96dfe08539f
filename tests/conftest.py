import pytest

from tests.builders import TiffBuilder


@pytest.fixture(params=['<', '>'], ids=['little-endian', 'big-endian'])
def builder(request):
    return TiffBuilder(request.param)


@pytest.fixture
def le_builder():
    return TiffBuilder('<')
