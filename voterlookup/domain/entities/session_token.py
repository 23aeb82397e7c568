"""
SessionToken - Anti-forgery token plus the cookie header it is bound to.
Owned by SessionTokenCache and replaced wholesale on refresh.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionToken:
    token: str
    cookie: str
    fetched_at: float  # monotonic clock reading

    def age(self, now: float) -> float:
        return now - self.fetched_at

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return self.age(now) < ttl_seconds
