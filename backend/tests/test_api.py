"""
End-to-end tests through the HTTP API: routing, envelopes, multipart
uploads, file serving and the error format.
"""

import json

from tests.conftest import PNG_BYTES, auth_headers


WORKOUT = {
    "title": "Push day",
    "split": "Push",
    "exercises": [{"name": "Bench", "sets": 3, "reps": 8, "weight": 185}],
    "duration": 60,
}


def _photo(name: str = "bench.png", content_type: str = "image/png", data: bytes = PNG_BYTES):
    return ("photos", (name, data, content_type))


async def _create_workout(client, headers, payload=WORKOUT, photos=()):
    return await client.post(
        "/api/workouts",
        data={"payload": json.dumps(payload)},
        files=list(photos) or None,
        headers=headers,
    )


class TestHealth:
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_ready_reports_dependencies(self, client):
        response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ready",
            "checks": {"database": True, "cache": True, "storage": True},
        }

    async def test_live(self, client):
        response = await client.get("/live")
        assert response.json() == {"status": "alive"}

    async def test_request_id_header(self, client):
        response = await client.get("/live", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


class TestWorkouts:
    async def test_multipart_create_with_photos(self, client, storage, make_user):
        user = await make_user()

        response = await _create_workout(client, auth_headers(user), photos=[_photo(), _photo("fly.png")])

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Workout created successfully"
        workout = body["data"]
        assert workout["userId"] == str(user.id)
        assert len(workout["photos"]) == 2
        assert workout["photoUrls"][0].endswith(f"/api/files/{workout['photos'][0]}")
        assert set(workout["photos"]) == set(storage.objects)

    async def test_uploaded_photo_is_served(self, client, make_user):
        user = await make_user()
        created = await _create_workout(client, auth_headers(user), photos=[_photo()])
        key = created.json()["data"]["photos"][0]

        response = await client.get(f"/api/files/{key}")

        assert response.status_code == 200
        assert response.content == PNG_BYTES
        assert response.headers["content-type"] == "image/png"

    async def test_missing_file(self, client):
        response = await client.get("/api/files/missing.png")
        assert response.status_code == 404

    async def test_invalid_payload_fields(self, client, make_user):
        user = await make_user()

        response = await _create_workout(client, auth_headers(user), payload={**WORKOUT, "title": "ab"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert body["code"] == "VALIDATION_ERROR"
        assert any(error.startswith("title:") for error in body["errors"])

    async def test_payload_must_be_json(self, client, make_user):
        user = await make_user()

        response = await client.post(
            "/api/workouts", data={"payload": "{not json"}, headers=auth_headers(user)
        )

        assert response.status_code == 400
        assert response.json()["errors"] == ["payload: must be valid JSON"]

    async def test_bad_photo_type(self, client, storage, make_user):
        user = await make_user()

        response = await _create_workout(
            client, auth_headers(user), photos=[_photo("notes.txt", "text/plain", b"hello")]
        )

        assert response.status_code == 400
        assert storage.objects == {}

    async def test_list_update_delete(self, client, storage, make_user):
        user = await make_user()
        headers = auth_headers(user)
        created = (await _create_workout(client, headers, photos=[_photo()])).json()["data"]

        listed = await client.get("/api/workouts", params={"split": "Push"}, headers=headers)
        assert listed.json()["data"]["pagination"]["totalItems"] == 1

        updated = await client.put(
            f"/api/workouts/{created['id']}",
            data={"payload": json.dumps({"notes": "felt strong", "removedPhotos": created["photos"]})},
            headers=headers,
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["notes"] == "felt strong"
        assert updated.json()["data"]["photos"] == []
        assert storage.objects == {}

        deleted = await client.delete(f"/api/workouts/{created['id']}", headers=headers)
        assert deleted.json() == {"success": True, "message": "Workout deleted successfully"}

        missing = await client.get(f"/api/workouts/{created['id']}", headers=headers)
        assert missing.status_code == 404
        assert missing.json()["message"] == "Workout not found"

    async def test_other_users_cannot_modify(self, client, make_user):
        owner = await make_user()
        other = await make_user("Grace", "Hopper")
        created = (await _create_workout(client, auth_headers(owner))).json()["data"]

        response = await client.delete(f"/api/workouts/{created['id']}", headers=auth_headers(other))

        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    async def test_requires_auth(self, client):
        response = await client.get("/api/workouts")
        assert response.status_code == 401

    async def test_limit_is_bounded(self, client, make_user):
        user = await make_user()

        response = await client.get("/api/workouts", params={"limit": 500}, headers=auth_headers(user))

        assert response.status_code == 400


class TestProgress:
    async def test_photo_entry_requires_photo(self, client, make_user):
        user = await make_user()

        response = await client.post(
            "/api/progress", data={"payload": json.dumps({"type": "photo"})}, headers=auth_headers(user)
        )

        assert response.status_code == 400
        assert response.json()["errors"] == ["photos: at least one photo is required for photo progress"]

    async def test_weight_entry(self, client, make_user):
        user = await make_user()

        response = await client.post(
            "/api/progress",
            data={"payload": json.dumps({"type": "weight", "weight": 181.4})},
            headers=auth_headers(user),
        )

        assert response.status_code == 201
        assert response.json()["data"]["weight"] == 181.4


class TestWeightLog:
    async def test_crud_is_not_captured_by_progress_routes(self, client, storage, make_user):
        user = await make_user()
        headers = auth_headers(user)

        created = await client.post(
            "/api/progress/weight",
            data={"payload": json.dumps({"weight": 181.2, "notes": "Monday"})},
            files=[_photo()],
            headers=headers,
        )
        entry = created.json()["data"]
        listed = await client.get("/api/progress/weight", headers=headers)
        updated = await client.put(
            f"/api/progress/weight/{entry['id']}",
            data={"payload": json.dumps({"weight": 180.0, "removedPhotos": entry["photos"]})},
            headers=headers,
        )
        deleted = await client.delete(f"/api/progress/weight/{entry['id']}", headers=headers)
        missing = await client.get(f"/api/progress/weight/{entry['id']}", headers=headers)

        assert created.status_code == 201
        assert created.json()["message"] == "Weight entry created"
        assert entry["weight"] == 181.2
        assert len(entry["photos"]) == 1
        assert [e["id"] for e in listed.json()["data"]["items"]] == [entry["id"]]
        assert updated.json()["data"]["weight"] == 180.0
        assert updated.json()["data"]["photos"] == []
        assert deleted.json() == {"success": True, "message": "Weight entry deleted"}
        assert missing.status_code == 404
        assert storage.objects == {}

    async def test_other_users_cannot_read_entries(self, client, make_user):
        owner = await make_user()
        other = await make_user("Grace", "Hopper")
        created = await client.post(
            "/api/progress/weight",
            data={"payload": json.dumps({"weight": 150})},
            headers=auth_headers(owner),
        )

        response = await client.get(
            f"/api/progress/weight/{created.json()['data']['id']}", headers=auth_headers(other)
        )
        listed = await client.get("/api/progress/weight", headers=auth_headers(other))

        assert response.status_code == 403
        assert listed.json()["data"]["items"] == []


class TestPersonalRecords:
    async def test_catalog_and_history_flow(self, client, make_user):
        user = await make_user()
        headers = auth_headers(user)

        created = await client.post(
            "/api/progress/pr/exercises", json={"name": "Deadlift", "unit": "lbs"}, headers=headers
        )
        exercise = created.json()["data"]
        duplicate = await client.post("/api/progress/pr/exercises", json={"name": "Deadlift"}, headers=headers)
        recorded = await client.post(
            "/api/progress/pr/progress", json={"exerciseId": exercise["id"], "value": 405}, headers=headers
        )
        history = await client.get(f"/api/progress/pr/progress/{exercise['id']}", headers=headers)
        locked = await client.put(
            f"/api/progress/pr/exercises/{exercise['id']}", json={"unit": "reps"}, headers=headers
        )
        renamed = await client.put(
            f"/api/progress/pr/exercises/{exercise['id']}", json={"name": "Conventional deadlift"}, headers=headers
        )
        catalog = await client.get("/api/progress/pr/exercises", headers=headers)

        assert created.status_code == 201
        assert created.json()["message"] == "Exercise created"
        assert duplicate.status_code == 409
        assert duplicate.json()["message"] == "Exercise already exists"
        assert recorded.status_code == 201
        assert recorded.json()["data"]["exerciseId"] == exercise["id"]
        body = history.json()["data"]
        assert body["exercise"]["id"] == exercise["id"]
        assert [pr["value"] for pr in body["prs"]] == [405]
        assert body["current"]["id"] == recorded.json()["data"]["id"]
        assert locked.status_code == 400
        assert renamed.json()["data"]["name"] == "Conventional deadlift"
        assert [e["name"] for e in catalog.json()["data"]] == ["Conventional deadlift"]

    async def test_record_and_exercise_deletion(self, client, make_user):
        user = await make_user()
        other = await make_user("Grace", "Hopper")
        headers = auth_headers(user)
        exercise = (
            await client.post("/api/progress/pr/exercises", json={"name": "Pull-ups", "unit": "reps"}, headers=headers)
        ).json()["data"]

        fractional = await client.post(
            "/api/progress/pr/progress", json={"exerciseId": exercise["id"], "value": 12.5}, headers=headers
        )
        pr = (
            await client.post(
                "/api/progress/pr/progress", json={"exerciseId": exercise["id"], "value": 12}, headers=headers
            )
        ).json()["data"]
        forbidden = await client.delete(f"/api/progress/pr/progress/{pr['id']}", headers=auth_headers(other))
        removed = await client.delete(f"/api/progress/pr/progress/{pr['id']}", headers=headers)
        dropped = await client.delete(f"/api/progress/pr/exercises/{exercise['id']}", headers=headers)
        gone = await client.get(f"/api/progress/pr/progress/{exercise['id']}", headers=headers)

        assert fractional.status_code == 400
        assert fractional.json()["message"] == "PR value must be a whole number"
        assert forbidden.status_code == 403
        assert removed.json() == {"success": True, "message": "PR deleted successfully"}
        assert dropped.json() == {"success": True, "message": "Exercise deleted"}
        assert gone.status_code == 404


class TestPosts:
    async def test_social_flow(self, client, make_user):
        author = await make_user()
        fan = await make_user("Grace", "Hopper")
        workout = (await _create_workout(client, auth_headers(author))).json()["data"]

        created = await client.post(
            "/api/posts",
            json={"type": "workout", "content": "New PR!", "workoutId": workout["id"]},
            headers=auth_headers(author),
        )
        assert created.status_code == 201
        post = created.json()["data"]
        assert post["workout"]["title"] == "Push day"
        assert post["user"]["firstName"] == "Ada"

        liked = await client.post(f"/api/posts/{post['id']}/like", headers=auth_headers(fan))
        assert liked.json()["message"] == "Post liked"
        assert liked.json()["data"] == {"liked": True, "likesCount": 1}

        comment = await client.post(
            f"/api/posts/{post['id']}/comment", json={"text": "Beast"}, headers=auth_headers(fan)
        )
        assert comment.status_code == 201
        comment_id = comment.json()["data"]["id"]

        reply = await client.post(
            f"/api/posts/comments/{comment_id}/replies", json={"text": "Thanks"}, headers=auth_headers(author)
        )
        assert reply.status_code == 201

        feed = await client.get("/api/posts", headers=auth_headers(fan))
        item = feed.json()["data"]["items"][0]
        assert item["likes"] == [str(fan.id)]
        assert item["likesCount"] == 1
        assert item["comments"][0]["replies"][0]["text"] == "Thanks"

        unliked = await client.post(f"/api/posts/{post['id']}/like", headers=auth_headers(fan))
        assert unliked.json()["message"] == "Post unliked"
        assert unliked.json()["data"]["likesCount"] == 0

    async def test_reference_of_another_user(self, client, make_user):
        owner = await make_user()
        other = await make_user("Grace", "Hopper")
        workout = (await _create_workout(client, auth_headers(owner))).json()["data"]

        response = await client.post(
            "/api/posts",
            json={"type": "workout", "content": "Mine?", "workoutId": workout["id"]},
            headers=auth_headers(other),
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Workout not found or unauthorized"

    async def test_mismatched_reference(self, client, make_user):
        user = await make_user()
        workout = (await _create_workout(client, auth_headers(user))).json()["data"]

        response = await client.post(
            "/api/posts",
            json={"type": "meal", "content": "Lunch", "workoutId": workout["id"]},
            headers=auth_headers(user),
        )

        assert response.status_code == 400

    async def test_edit_and_delete(self, client, make_user):
        author = await make_user()
        other = await make_user("Grace", "Hopper")
        post = (
            await client.post(
                "/api/posts", json={"type": "meal", "content": "draft"}, headers=auth_headers(author)
            )
        ).json()["data"]

        forbidden = await client.patch(
            f"/api/posts/{post['id']}", json={"content": "hijack"}, headers=auth_headers(other)
        )
        assert forbidden.status_code == 403

        edited = await client.patch(
            f"/api/posts/{post['id']}", json={"content": "final"}, headers=auth_headers(author)
        )
        assert edited.json()["data"]["content"] == "final"

        deleted = await client.delete(f"/api/posts/{post['id']}", headers=auth_headers(author))
        assert deleted.json()["message"] == "Post deleted successfully"
        assert (await client.get(f"/api/posts/{post['id']}", headers=auth_headers(author))).status_code == 404

    async def test_reply_to_missing_comment(self, client, make_user):
        user = await make_user()

        response = await client.post(
            "/api/posts/comments/00000000-0000-0000-0000-000000000000/replies",
            json={"text": "hello"},
            headers=auth_headers(user),
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Comment not found"


class TestUsers:
    async def test_profile_and_goal_weight(self, client, make_user):
        user = await make_user()
        headers = auth_headers(user)

        profile = await client.put("/api/users/profile", json={"weight": 150, "age": 30}, headers=headers)
        goal = await client.put("/api/users/goal-weight", json={"goalWeight": 140}, headers=headers)

        assert profile.json()["data"]["weight"] == 150
        assert goal.json()["data"]["goalWeight"] == 140

    async def test_profile_picture_replaces_previous(self, client, storage, make_user):
        user = await make_user()
        headers = auth_headers(user)

        first = await client.post(
            "/api/users/profile/picture",
            files={"profilePicture": ("me.png", PNG_BYTES, "image/png")},
            headers=headers,
        )
        second = await client.post(
            "/api/users/profile/picture",
            files={"profilePicture": ("me2.png", PNG_BYTES, "image/png")},
            headers=headers,
        )

        first_key = first.json()["data"]["profilePicture"]
        second_key = second.json()["data"]["profilePicture"]
        assert first_key != second_key
        assert list(storage.objects) == [second_key]
        assert second.json()["data"]["profilePictureUrl"].endswith(second_key)

    async def test_directory_search(self, client, make_user):
        await make_user()
        grace = await make_user("Grace", "Hopper")

        response = await client.get("/api/users", params={"search": "hop"}, headers=auth_headers(grace))

        items = response.json()["data"]["items"]
        assert [u["firstName"] for u in items] == ["Grace"]
        assert "email" not in items[0]
