import pytest

from autowire.singleton import Singleton, is_singleton


class Config(Singleton):
    def __init__(self, name="default"):
        self.name = name


class Cache(Singleton):
    pass


@pytest.fixture(autouse=True)
def reset_singletons():
    yield
    Singleton.reset()


def test_instance_is_shared():
    assert Config.instance() is Config.instance()


def test_later_arguments_are_ignored():
    first = Config.instance("first")

    assert Config.instance("second") is first
    assert first.name == "first"


def test_each_subclass_has_its_own_instance():
    assert Config.instance() is not Cache.instance()


def test_reset_discards_only_that_class():
    config = Config.instance()
    cache = Cache.instance()

    Config.reset()

    assert Config.instance() is not config
    assert Cache.instance() is cache


def test_reset_on_base_class_discards_all():
    config = Config.instance()
    cache = Cache.instance()

    Singleton.reset()

    assert Config.instance() is not config
    assert Cache.instance() is not cache


def test_is_singleton():
    assert is_singleton(Config)
    assert not is_singleton(object)
    assert not is_singleton(Config.instance())


def test_public_api_is_documented():
    assert is_singleton.__doc__
    assert Singleton.instance.__doc__
    assert Singleton.reset.__doc__
