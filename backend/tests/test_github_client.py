import base64
import json

import httpx

from blog_api.models.post import AuthorIdentity
from blog_api.services.github import DirectoryEntry, GitHubConfig, GitHubContentsStore


def _config(branch: str = "") -> GitHubConfig:
    return GitHubConfig(token="tkn", owner="octo", repo="blog", branch=branch, api_url="https://gh.test")


def _store(handler, branch: str = "") -> GitHubContentsStore:
    config = _config(branch)
    client = httpx.AsyncClient(
        base_url=config.api_url,
        headers=config.headers(),
        transport=httpx.MockTransport(handler),
    )
    return GitHubContentsStore(config, client=client)


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


async def test_read_decodes_base64_content():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json={"content": _b64('{"id": "1"}'), "sha": "abc"})

    store = _store(handler)

    assert await store.read("posts/1.json") == '{"id": "1"}'
    assert seen == {"path": "/repos/octo/blog/contents/posts/1.json", "auth": "Bearer tkn"}


async def test_read_missing_and_error_are_none():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("missing.json"):
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(500, text="boom")

    store = _store(handler)

    assert await store.read("posts/missing.json") is None
    assert await store.read("posts/other.json") is None


async def test_transport_error_is_reported_not_raised():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    store = _store(handler)

    assert await store.read("posts/1.json") is None
    assert await store.list_directory("posts") is None
    assert await store.write("posts/1.json", "{}", "msg") is False
    assert await store.delete("posts/1.json", "sha", "msg") is False


async def test_revision_token_is_file_sha():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("1.json"):
            return httpx.Response(200, json={"content": "", "sha": "abc123"})
        return httpx.Response(404)

    store = _store(handler)

    assert await store.get_revision_token("posts/1.json") == "abc123"
    assert await store.get_revision_token("posts/2.json") is None


async def test_list_directory_entries():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {"name": "1.json", "path": "posts/1.json", "type": "file"},
                {"name": "drafts", "path": "posts/drafts", "type": "dir"},
            ],
        )

    store = _store(handler)

    assert await store.list_directory("posts") == [
        DirectoryEntry(name="1.json", path="posts/1.json", type="file"),
        DirectoryEntry(name="drafts", path="posts/drafts", type="dir"),
    ]


async def test_list_missing_directory_is_empty():
    store = _store(lambda request: httpx.Response(404))
    assert await store.list_directory("posts") == []


async def test_write_sends_commit_with_attribution_and_sha():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={})

    store = _store(handler, branch="main")
    author = AuthorIdentity(name="Alice", email="a@example.com")

    ok = await store.write("posts/1.json", '{"id": "1"}', "Update post: x", "sha1", author)

    assert ok is True
    assert seen["method"] == "PUT"
    body = seen["body"]
    assert base64.b64decode(body["content"]).decode("utf-8") == '{"id": "1"}'
    assert body["message"] == "Update post: x"
    assert body["sha"] == "sha1"
    assert body["branch"] == "main"
    assert body["author"] == {"name": "Alice", "email": "a@example.com"}
    assert body["committer"] == body["author"]


async def test_create_omits_sha_and_attribution():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={})

    store = _store(handler)

    assert await store.write("posts/1.json", "{}", "Create post: x") is True
    assert set(seen["body"]) == {"message", "content"}


async def test_write_conflict_is_failure():
    store = _store(lambda request: httpx.Response(409, json={"message": "sha mismatch"}))
    assert await store.write("posts/1.json", "{}", "msg", "stale") is False


async def test_delete_sends_sha():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={})

    store = _store(handler)

    assert await store.delete("posts/1.json", "abc", "Delete post: 1") is True
    assert seen["method"] == "DELETE"
    assert seen["body"] == {"message": "Delete post: 1", "sha": "abc"}


async def test_read_uses_branch_ref():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["ref"] = request.url.params.get("ref")
        return httpx.Response(404)

    store = _store(handler, branch="content")
    await store.read("posts/1.json")

    assert seen["ref"] == "content"
