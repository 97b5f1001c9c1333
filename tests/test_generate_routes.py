import pytest

from content_studio.models.user import UserType
from content_studio.services.content_generator import TemplateContentGenerator
from content_studio.services.usage_service import get_user_usage


class OversizedScriptGenerator(TemplateContentGenerator):
    def __init__(self, size):
        self.size = size

    def generate_script(self, topic, keywords=None, tone=None, length=None, max_length=None):
        return "x" * self.size


class FailingGenerator(TemplateContentGenerator):
    def generate_title(self, topic, keywords=None):
        raise RuntimeError("generator unavailable")


def test_generate_script(client, make_user, auth_headers, store):
    user = make_user()

    response = client.post("/generate/script", json={"topic": "Python"}, headers=auth_headers(user))

    assert response.status_code == 200
    body = response.json()
    assert "Python" in body["script"]
    assert body["message"] == "Script generated successfully"
    assert body["length"] == len(body["script"])
    assert body["max_length"] == 2000
    assert get_user_usage(store, user.id).scripts_used == 1


def test_basic_user_is_blocked_after_five_scripts(client, make_user, auth_headers, store):
    user = make_user()
    headers = auth_headers(user)

    for _ in range(5):
        assert client.post("/generate/script", json={"topic": "Python"}, headers=headers).status_code == 200

    response = client.post("/generate/script", json={"topic": "Python"}, headers=headers)

    assert response.status_code == 403
    detail = response.json()["detail"]
    assert detail["limit"] == 5
    assert "5 scripts" in detail["error"]
    assert get_user_usage(store, user.id).scripts_used == 5


def test_requested_length_over_plan_maximum(client, make_user, auth_headers, store):
    user = make_user()

    response = client.post(
        "/generate/script", json={"topic": "Python", "length": 2001}, headers=auth_headers(user)
    )

    assert response.status_code == 413
    assert response.json()["detail"]["max_length"] == 2000
    assert get_user_usage(store, user.id).scripts_used == 0


def test_premium_user_may_request_longer_scripts(client, make_user, auth_headers):
    user = make_user(user_type=UserType.PREMIUM)

    response = client.post(
        "/generate/script", json={"topic": "Python", "length": 4000}, headers=auth_headers(user)
    )

    assert response.status_code == 200
    assert response.json()["max_length"] == 5000


def test_generated_script_over_plan_maximum_is_not_counted(
    client, make_user, auth_headers, store, override_generator
):
    override_generator(OversizedScriptGenerator(2001))
    user = make_user()

    response = client.post("/generate/script", json={"topic": "Python"}, headers=auth_headers(user))

    assert response.status_code == 413
    assert get_user_usage(store, user.id).scripts_used == 0


def test_failed_generation_is_not_counted(client, make_user, auth_headers, store, override_generator):
    override_generator(FailingGenerator())
    user = make_user()

    with pytest.raises(RuntimeError):
        client.post("/generate/title", json={"topic": "Python"}, headers=auth_headers(user))

    assert get_user_usage(store, user.id).titles_used == 0


def test_generate_title(client, make_user, auth_headers, store):
    user = make_user()

    response = client.post(
        "/generate/title", json={"topic": "Python", "keywords": "automation"}, headers=auth_headers(user)
    )

    assert response.status_code == 200
    assert "Python" in response.json()["title"]
    assert get_user_usage(store, user.id).titles_used == 1


@pytest.mark.parametrize(
    "path, payload",
    [
        ("/generate/image", {"prompt": "A sunset over the sea"}),
        ("/generate/audio", {"text": "Welcome to the channel"}),
    ],
)
def test_basic_user_has_no_media_access(client, make_user, auth_headers, path, payload):
    user = make_user()

    response = client.post(path, json=payload, headers=auth_headers(user))

    assert response.status_code == 403
    assert response.json()["detail"]["limit"] == 0


def test_premium_user_generates_image_and_audio(client, make_user, auth_headers, store):
    user = make_user(user_type=UserType.PREMIUM)
    headers = auth_headers(user)

    image = client.post("/generate/image", json={"prompt": "A sunset", "style": "photo"}, headers=headers)
    audio = client.post("/generate/audio", json={"text": "Welcome", "voice": "alloy"}, headers=headers)

    assert image.status_code == 200
    assert image.json()["image_url"].startswith("https://")
    assert audio.status_code == 200
    assert audio.json()["audio_url"].startswith("https://")

    usage = get_user_usage(store, user.id)
    assert usage.images_used == 1
    assert usage.audios_used == 1


def test_admin_is_not_limited_by_basic_quota(client, make_user, auth_headers):
    user = make_user(user_type=UserType.ADMIN)
    headers = auth_headers(user)

    for _ in range(6):
        assert client.post("/generate/script", json={"topic": "Python"}, headers=headers).status_code == 200


def test_generation_requires_authentication(client):
    response = client.post("/generate/script", json={"topic": "Python"})
    assert response.status_code == 401


def test_invalid_body_is_rejected(client, make_user, auth_headers):
    user = make_user()

    response = client.post("/generate/script", json={"topic": ""}, headers=auth_headers(user))

    assert response.status_code == 422


@pytest.mark.parametrize("store", ["sql"], indirect=True)
def test_generate_script_with_sql_store(client, make_user, auth_headers, store):
    user = make_user()

    response = client.post("/generate/script", json={"topic": "Python"}, headers=auth_headers(user))

    assert response.status_code == 200
    assert get_user_usage(store, user.id).scripts_used == 1
