import pytest

from optres.primitives.batch import Partition, partition
from optres.primitives.errors import DomainError
from optres.primitives.result import Ok, Err

pytestmark = [pytest.mark.unit, pytest.mark.monad]


class TestPartition:
    def test_splits_and_preserves_order(self):
        """GIVEN [Ok(1), Ok(2), Err(e1), Err(e2)]
           WHEN partition을 호출하면
           THEN ok=(1, 2), err=(e1, e2)가 된다
        """
        e1, e2 = ValueError("1"), DomainError("c", "2")
        assert partition([Ok(1), Ok(2), Err(e1), Err(e2)]) == Partition(ok=(1, 2), err=(e1, e2))

    def test_interleaved_input_keeps_relative_order(self):
        e1, e2 = KeyError("a"), KeyError("b")
        p = partition([Err(e1), Ok("x"), Err(e2), Ok("y"), Ok("z")])
        assert p.ok == ("x", "y", "z")
        assert p.err == (e1, e2)

    def test_empty_input(self):
        assert partition([]) == Partition(ok=(), err=())

    def test_accepts_generators(self):
        p = partition(Ok(i) if i % 2 else Err(str(i)) for i in range(5))
        assert p.ok == (1, 3)
        assert [e.message for e in p.err] == ["0", "2", "4"]

    def test_unpacking(self):
        ok, err = partition([Ok(1), Err("x")])
        assert ok == (1,)
        assert len(err) == 1
