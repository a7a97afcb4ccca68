"""Unit tests for endpoint descriptions.

Covers the defaults of the Endpoint interface, URL composition and
the StaticEndpoint value type.
"""

import pytest

from endpoint_client.endpoint import Endpoint, HTTPMethod, StaticEndpoint


class UsersEndpoint(Endpoint):
    @property
    def base_url(self) -> str:
        return "https://api.example.com"

    @property
    def path(self) -> str:
        return "/v1/users"


class CreateUserEndpoint(UsersEndpoint):
    def __init__(self, name: str):
        self.name = name

    @property
    def method(self) -> HTTPMethod:
        return HTTPMethod.POST

    @property
    def headers(self):
        return {"X-Trace": "abc"}

    @property
    def parameters(self):
        return {"name": self.name}


@pytest.mark.unit
def test_url_is_plain_concatenation():
    assert UsersEndpoint().url == "https://api.example.com/v1/users"


@pytest.mark.unit
def test_url_inserts_no_separator():
    ep = StaticEndpoint(base_url="https://api.example.com", path="v1/users")
    assert ep.url == "https://api.example.comv1/users"


@pytest.mark.unit
def test_defaults():
    ep = UsersEndpoint()
    assert ep.method is HTTPMethod.GET
    assert ep.headers == {}
    assert ep.parameters == {}


@pytest.mark.unit
def test_overrides():
    ep = CreateUserEndpoint("ada")
    assert ep.method is HTTPMethod.POST
    assert ep.headers == {"X-Trace": "abc"}
    assert ep.parameters == {"name": "ada"}
    assert ep.url == "https://api.example.com/v1/users"


@pytest.mark.unit
def test_base_url_and_path_are_required():
    class Incomplete(Endpoint):
        @property
        def base_url(self) -> str:
            return "https://api.example.com"

    with pytest.raises(TypeError):
        Incomplete()


@pytest.mark.unit
def test_url_cannot_be_assigned():
    with pytest.raises(AttributeError):
        UsersEndpoint().url = "https://elsewhere.example.com"


@pytest.mark.unit
@pytest.mark.parametrize(
    "method, verb",
    [
        (HTTPMethod.GET, "GET"),
        (HTTPMethod.POST, "POST"),
        (HTTPMethod.PUT, "PUT"),
        (HTTPMethod.DELETE, "DELETE"),
    ],
)
def test_method_verbs(method, verb):
    assert method.verb == verb


@pytest.mark.unit
def test_static_endpoint_accepts_verb_strings():
    ep = StaticEndpoint("https://api.example.com", "/items", method="DELETE")
    assert ep.method is HTTPMethod.DELETE


@pytest.mark.unit
def test_static_endpoint_does_not_share_mutable_state():
    params = {"a": 1}
    ep = StaticEndpoint("https://api.example.com", "/items", parameters=params)
    params["b"] = 2
    ep.parameters["c"] = 3
    assert ep.parameters == {"a": 1}


@pytest.mark.unit
def test_static_endpoint_equality():
    a = StaticEndpoint("https://api.example.com", "/items", headers={"X": "1"})
    b = StaticEndpoint("https://api.example.com", "/items", headers={"X": "1"})
    c = StaticEndpoint("https://api.example.com", "/other")
    assert a == b
    assert a != c
    assert "https://api.example.com/items" in repr(a)
