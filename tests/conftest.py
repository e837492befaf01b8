import logging
import os

import pytest

from rifx.meta import Endianess

from builders import ContainerBuilder


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


@pytest.fixture(
    params=[Endianess.BIG_ENDIAN, Endianess.LITTLE_ENDIAN],
    ids=['RIFX', 'XFIR'],
)
def endianess(request):
    return request.param


@pytest.fixture
def builder(endianess):
    return ContainerBuilder(endianess=endianess)
