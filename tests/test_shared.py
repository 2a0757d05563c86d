import pytest

from autowire import Container, ContainerError
from autowire.shared import init_container, reset_container, shared_container


@pytest.fixture(autouse=True)
def clean_shared_container():
    reset_container()
    yield
    reset_container()


def test_shared_container_requires_init():
    with pytest.raises(ContainerError, match="init_container"):
        shared_container()


def test_init_installs_given_container():
    container = Container()

    assert init_container(container) is container
    assert shared_container() is container


def test_init_creates_container_when_none_given():
    container = init_container()

    assert isinstance(container, Container)
    assert shared_container() is container


def test_init_twice_raises():
    init_container()

    with pytest.raises(ContainerError, match="already installed"):
        init_container()


def test_reset_allows_reinstalling():
    first = init_container()
    reset_container()

    assert init_container() is not first
