"""Tests for reference counting."""

from smartcols.refcount import RefCounted


class Tracked(RefCounted):
    def __init__(self) -> None:
        super().__init__()
        self.releases = 0

    def _release(self) -> None:
        self.releases += 1


class TestRefCounted:
    """Tests for the RefCounted base class."""

    def test_starts_with_one_reference(self) -> None:
        obj = Tracked()
        assert obj.refcount == 1
        assert not obj.released

    def test_ref_returns_self(self) -> None:
        obj = Tracked()
        assert obj.ref() is obj
        assert obj.refcount == 2

    def test_release_at_zero(self) -> None:
        obj = Tracked()
        obj.ref()
        obj.unref()
        assert obj.releases == 0
        obj.unref()
        assert obj.releases == 1
        assert obj.released
        assert obj.refcount == 0

    def test_release_runs_once(self) -> None:
        """Dropping a reference of a released object is a no-op."""
        obj = Tracked()
        obj.unref()
        obj.unref()
        assert obj.releases == 1
        assert obj.refcount == 0
