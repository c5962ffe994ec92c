import uuid

import pytest

from bitbinder.db.repositories.set_lists import clean_rename, reorder_ids


def _ids(n):
    return [uuid.uuid4() for _ in range(n)]


def test_reorder_moves_source_to_target_index():
    a, b, c, d = _ids(4)
    assert reorder_ids([a, b, c, d], a, c) == [b, c, a, d]
    assert reorder_ids([a, b, c, d], d, b) == [a, d, b, c]


def test_reorder_same_id_is_unchanged():
    a, b = _ids(2)
    assert reorder_ids([a, b], b, b) == [a, b]


def test_reorder_unknown_ids_raise():
    a, b, c = _ids(3)
    with pytest.raises(ValueError):
        reorder_ids([a, b], a, c)
    with pytest.raises(ValueError):
        reorder_ids([a, b], c, a)


def test_clean_rename_trims_and_truncates():
    assert clean_rename("  Late show  ") == "Late show"
    assert clean_rename("x" * 80) == "x" * 50
    assert clean_rename("   ") is None
    assert clean_rename(None) is None
