"""Test doubles shared across the suite."""

from points_core.models import AccountSnapshot


def snapshot(points, uid="u1", email="a@b.com"):
    return AccountSnapshot(uid=uid, email=email, points=points, total_games=3,
                           invite_code="INV42", total_referrals=1)


class FakeClient:
    """Scripted AccountClient: each fetch pops the next result (snapshot or exception)."""

    def __init__(self, fetches=(), grant=None):
        self.fetches = list(fetches)
        self.grant = grant if grant is not None else {"message": "Points added"}
        self.calls = []

    def fetch_account(self, uid):
        self.calls.append(("fetch", uid))
        result = self.fetches.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def grant_points(self, uid, email, device_id):
        self.calls.append(("grant", uid, email, device_id))
        if isinstance(self.grant, Exception):
            raise self.grant
        return self.grant


class ManualScheduler:
    """Timer backend fired explicitly by the test."""

    def __init__(self):
        self.handles = []

    def call_later(self, delay_sec, callback):
        handle = {"delay": delay_sec, "callback": callback, "cancelled": False, "fired": False}
        self.handles.append(handle)
        return handle

    def cancel(self, handle):
        handle["cancelled"] = True

    @property
    def pending(self):
        return [h for h in self.handles if not h["cancelled"] and not h["fired"]]

    def fire(self):
        for handle in self.pending:
            handle["fired"] = True
            handle["callback"]()
