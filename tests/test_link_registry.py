"""Tests for the in-memory link code registry."""

from datetime import datetime, timedelta, timezone

from services.link_registry import LinkRegistry


class FakeClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now


START = datetime(2026, 10, 19, 3, 0, tzinfo=timezone.utc)
MS = timedelta(milliseconds=1)


def make_registry():
    clock = FakeClock(START)
    return LinkRegistry(ttl_seconds=300, clock=clock), clock


class TestIssue:
    def test_code_is_six_digits(self):
        registry, _ = make_registry()
        for _ in range(50):
            code = registry.issue("a@x.com")
            assert len(code) == 6
            assert code.isdigit()
            assert 100000 <= int(code) <= 999999

    def test_expiry_is_five_minutes_after_issue(self):
        registry, _ = make_registry()
        code = registry.issue("a@x.com")
        assert registry.get(code).expires_at == START + timedelta(minutes=5)

    def test_collision_last_writer_wins(self, monkeypatch):
        registry, _ = make_registry()
        monkeypatch.setattr(LinkRegistry, "generate_code", staticmethod(lambda: "123456"))

        registry.issue("first@x.com")
        registry.issue("second@x.com")

        assert registry.pending_count() == 1
        assert registry.redeem("123456") == "second@x.com"


class TestRedeem:
    def test_redeem_just_before_expiry_succeeds_once(self):
        registry, _ = make_registry()
        code = registry.issue("a@x.com")
        expires_at = registry.get(code).expires_at

        assert registry.redeem(code, now=expires_at - MS) == "a@x.com"
        assert registry.redeem(code, now=expires_at - MS) is None

    def test_redeem_just_after_expiry_fails(self):
        registry, _ = make_registry()
        code = registry.issue("a@x.com")
        expires_at = registry.get(code).expires_at

        assert registry.redeem(code, now=expires_at + MS) is None

    def test_redeem_at_exact_expiry_fails(self):
        registry, _ = make_registry()
        code = registry.issue("a@x.com")
        assert registry.redeem(code, now=registry.get(code).expires_at) is None

    def test_unknown_code(self):
        registry, _ = make_registry()
        assert registry.redeem("000000") is None

    def test_uses_injected_clock_by_default(self):
        registry, clock = make_registry()
        code = registry.issue("a@x.com")
        clock.now = START + timedelta(minutes=6)
        assert registry.redeem(code) is None

    def test_expired_entry_is_removed_on_redeem(self):
        registry, clock = make_registry()
        code = registry.issue("a@x.com")
        clock.now = START + timedelta(minutes=6)
        registry.redeem(code)
        assert registry.pending_count() == 0


class TestGet:
    def test_does_not_consume(self):
        registry, _ = make_registry()
        code = registry.issue("a@x.com")

        assert registry.get(code).email == "a@x.com"
        assert registry.redeem(code) == "a@x.com"

    def test_expired_code_is_not_returned(self):
        registry, clock = make_registry()
        code = registry.issue("a@x.com")
        clock.now = START + timedelta(minutes=5)

        assert registry.get(code) is None
        assert registry.pending_count() == 1


class TestSweepExpired:
    def test_removes_only_expired_entries(self):
        registry, clock = make_registry()
        old = registry.issue("old@x.com")
        clock.now = START + timedelta(minutes=3)
        fresh = registry.issue("fresh@x.com")

        removed = registry.sweep_expired(START + timedelta(minutes=5, seconds=1))

        assert removed == 1
        assert registry.get(old) is None
        assert registry.get(fresh) is not None

    def test_entry_expiring_exactly_now_is_kept(self):
        registry, _ = make_registry()
        code = registry.issue("a@x.com")
        assert registry.sweep_expired(registry.get(code).expires_at) == 0

    def test_idempotent(self):
        registry, _ = make_registry()
        registry.issue("a@x.com")
        later = START + timedelta(minutes=10)
        assert registry.sweep_expired(later) == 1
        assert registry.sweep_expired(later) == 0
