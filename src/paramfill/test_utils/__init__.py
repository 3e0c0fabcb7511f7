from .host import FakeSuite, FakeTest, SpyEmitter

__all__ = ["SpyEmitter", "FakeSuite", "FakeTest"]
