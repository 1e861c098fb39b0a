"""Unit tests for models.limits and models.state."""

import pytest

from nodeparams.models.limits import SizeLimits
from nodeparams.models.state import InitState


class TestSizeLimits:
    """SizeLimits construction and validation."""

    def test_valid(self) -> None:
        limits = SizeLimits(max_send=1024, max_recv=2048)
        assert limits.max_send == 1024
        assert limits.max_recv == 2048

    def test_zero_allowed(self) -> None:
        limits = SizeLimits(max_send=0, max_recv=0)
        assert limits.max_send == 0

    def test_negative_send(self) -> None:
        with pytest.raises(ValueError, match="max_send"):
            SizeLimits(max_send=-1, max_recv=0)

    def test_negative_recv(self) -> None:
        with pytest.raises(ValueError, match="max_recv"):
            SizeLimits(max_send=0, max_recv=-1)

    def test_frozen(self) -> None:
        limits = SizeLimits(max_send=1, max_recv=1)
        with pytest.raises(AttributeError):
            limits.max_send = 2  # type: ignore[misc]

    def test_equality(self) -> None:
        assert SizeLimits(1, 2) == SizeLimits(max_send=1, max_recv=2)


class TestInitState:
    """InitState enum."""

    def test_members(self) -> None:
        assert [s.value for s in InitState] == ["uninitialized", "initializing", "done"]
