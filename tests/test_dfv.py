import pytest

from hdbwire.dfv import (
    DFV_LEVEL0,
    DFV_LEVEL2,
    DFV_LEVEL3,
    DFV_LEVEL5,
    DFV_LEVEL7,
    DFV_LEVEL8,
    is_supported_dfv,
    supported_dfvs,
)


def test_default_dfvs():
    assert supported_dfvs(True) == [DFV_LEVEL8]


def test_all_supported_dfvs():
    assert supported_dfvs(False) == [1, 4, 6, 8]


def test_default_is_supported():
    assert all(is_supported_dfv(dfv) for dfv in supported_dfvs(True))


def test_supported_list_matches_predicate():
    assert [dfv for dfv in range(DFV_LEVEL0, DFV_LEVEL8 + 1) if is_supported_dfv(dfv)] == supported_dfvs(False)


@pytest.mark.parametrize("dfv", [DFV_LEVEL0, DFV_LEVEL2, DFV_LEVEL3, DFV_LEVEL5, DFV_LEVEL7])
def test_unsupported(dfv):
    assert is_supported_dfv(dfv) is False


def test_returned_list_is_a_copy():
    first = supported_dfvs(False)
    first.clear()
    assert len(supported_dfvs(False)) == 4