import json
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from loklak import ConfigError, DecodeError, Loklak, LoklakConnectionError, QueryOptions, ServerConfig


def test_hello(lk):
    data = json.loads(lk.hello())

    assert data["endpoint"] == "hello"
    assert data["host"] == "loklak.test"
    assert data["params"] == []
    assert data["query_string"] == ""


def test_output_is_indented_json(lk):
    text = lk.status()

    assert text.startswith("{\n  ")
    assert json.loads(text)["endpoint"] == "status"


@pytest.mark.parametrize("method", ["hello", "peers", "status", "apps"])
def test_status_endpoints_use_configured_server(lk, method):
    text = getattr(lk, method)()
    assert json.loads(text)


def test_peers(lk):
    data = json.loads(lk.peers())

    assert data["count"] == 2
    assert data["peers"][0]["host"] == "peer-a.example"


def test_search_sends_composite_query(lk):
    options = QueryOptions(query="climate", since="2024-01-01", until="2024-02-01", from_user="alice", count="10")

    data = json.loads(lk.search(options))

    assert data["endpoint"] == "search"
    assert data["params"] == [
        ["q", "climate since:2024-01-01 until:2024-02-01 from:alice"],
        ["count", "10"],
    ]


def test_search_keyword_overrides_do_not_mutate_options(lk):
    options = QueryOptions(query="climate", count="10")

    data = json.loads(lk.search(options, count="3", source="cache"))

    assert data["params"] == [["q", "climate"], ["count", "3"], ["source", "cache"]]
    assert options == QueryOptions(query="climate", count="10")


def test_user(lk):
    data = json.loads(lk.user(screen_name="fossasia", followers="100"))

    assert data["endpoint"] == "user"
    assert data["host"] == "loklak.test"
    assert data["params"] == [["screen_name", "fossasia"], ["followers", "100"]]


def test_suggest(lk):
    data = json.loads(lk.suggest(QueryOptions(query="fossasia", order="asc", order_by="retrieval_next")))

    assert data["params"] == [["q", "fossasia"], ["order", "asc"], ["orderby", "retrieval_next"]]


def test_settings_always_targets_local_address(lk):
    data = json.loads(lk.settings())

    assert data["endpoint"] == "settings"
    assert data["host"] == "localhost"
    assert data["port"] == 9000


def test_account_always_targets_local_address(lk):
    data = json.loads(lk.account(screen_name="alice"))

    assert (data["host"], data["port"]) == ("localhost", 9000)
    assert data["params"] == [["screen_name", "alice"]]


def test_local_address_is_overridable(http):
    lk = Loklak("http://loklak.test", http=http, local_url="http://admin.test:9100")

    assert json.loads(lk.settings())["host"] == "admin.test"
    assert json.loads(lk.account())["port"] == 9100
    assert json.loads(lk.hello())["host"] == "loklak.test"


def test_base_url_with_path_prefix(http):
    lk = Loklak("http://loklak.test/api-root/", http=http)

    response = lk.fetch("hello")

    # The fake server only routes /api/..., so a prefixed base yields its 404 body.
    assert response.data == {"detail": "Not Found"}


def test_fetch_returns_structured_response(lk):
    response = lk.fetch("search", query="x", since="2024-01-01")

    assert response.data["params"] == [["q", "x since:2024-01-01"]]
    assert response.raw.startswith(b"{")


def test_fetch_unknown_endpoint(lk):
    with pytest.raises(KeyError, match="Unknown endpoint"):
        lk.fetch("tweets")


def test_non_json_body_raises_decode_error():
    def handler(request):
        return httpx.Response(200, content=b"{invalid")

    lk = Loklak("http://loklak.test", http=httpx.Client(transport=httpx.MockTransport(handler)))

    with pytest.raises(DecodeError):
        lk.hello()
    with pytest.raises(DecodeError):
        lk.call("push.json", {"a": "b"})


def test_server_error_body_is_returned(lk):
    assert lk.call_raw("error.json") == b'{"error":"boom"}'


def test_call_raw_posts_form(lk):
    raw = lk.call_raw("push.json", {"source": "import", "id": ["1", "2"]})

    data = json.loads(raw)
    assert data["method"] == "POST"
    assert data["endpoint"] == "push.json"
    assert data["params"] == [["source", "import"], ["id", "1"], ["id", "2"]]


def test_call_decodes(lk):
    data = lk.call("/hello.json")

    assert data["endpoint"] == "hello.json"
    assert data["params"] == []


def test_connection_failure_is_returned_to_caller(unreachable):
    lk = Loklak("http://loklak.test", http=unreachable)

    with pytest.raises(LoklakConnectionError):
        lk.hello()
    with pytest.raises(LoklakConnectionError):
        lk.search(query="x")


def test_concurrent_calls_do_not_share_params():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"q": request.url.params.get("q"), "count": request.url.params.get("count")})

    lk = Loklak("http://loklak.test", http=httpx.Client(transport=httpx.MockTransport(handler)))
    jobs = [QueryOptions(query=f"term{i}", count=str(i)) for i in range(20)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda o: json.loads(lk.search(o)), jobs))

    assert results == [{"q": f"term{i}", "count": str(i)} for i in range(20)]


def test_context_manager_and_repr(http):
    with Loklak("http://loklak.test", http=http) as lk:
        assert repr(lk) == "Loklak(base_url='http://loklak.test/')"


# ----- ServerConfig -----


def test_server_config_normalises_trailing_slash():
    config = ServerConfig("http://loklak.test")

    assert config.base_url == "http://loklak.test/"
    assert config.local_url == "http://localhost:9000/"


@pytest.mark.parametrize("url", ["ftp://loklak.test", "not a url", "loklak.test", "http://", ""])
def test_server_config_rejects_malformed_urls(url):
    with pytest.raises(ConfigError):
        ServerConfig(url)


def test_client_rejects_malformed_url():
    with pytest.raises(ConfigError):
        Loklak("localhost:9000")


def test_server_config_is_immutable():
    config = ServerConfig("http://loklak.test")

    with pytest.raises(AttributeError):
        config.base_url = "http://other.test/"


def test_server_config_load(tmp_path):
    path = tmp_path / "server.yaml"
    path.write_text("base_url: https://api.loklak.test\ntimeout: 5\nextra: ignored\n")

    config = ServerConfig.load(path)

    assert config == ServerConfig(base_url="https://api.loklak.test/", timeout=5)


def test_server_config_load_rejects_non_mapping(tmp_path):
    path = tmp_path / "server.yaml"
    path.write_text("just a string\n")

    with pytest.raises(ConfigError):
        ServerConfig.load(path)


def test_server_config_load_rejects_malformed_yaml(tmp_path):
    path = tmp_path / "server.yaml"
    path.write_text("base_url: [unclosed\n")

    with pytest.raises(ConfigError, match="server.yaml"):
        ServerConfig.load(path)


def test_server_config_coerces_timeout(tmp_path):
    path = tmp_path / "server.yaml"
    path.write_text("timeout: '2.5'\n")

    assert ServerConfig.load(path).timeout == 2.5
    assert ServerConfig(timeout=5).timeout == 5.0


@pytest.mark.parametrize("timeout", ["5s", None, [1]])
def test_server_config_rejects_bad_timeout(timeout):
    with pytest.raises(ConfigError, match="timeout"):
        ServerConfig(timeout=timeout)
