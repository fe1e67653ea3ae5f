from __future__ import annotations

from app.models.enums import SubtaskType, UserRole
from app.models.tasks import Subtask


class TestAuth:
    def test_login_me_logout(self, client, admin):
        resp = client.post("/api/auth/login", json={"username": "admin", "password": "secret-pass"})
        assert resp.status_code == 200
        assert resp.json()["role"] == "admin"
        assert "session" in resp.cookies

        me = client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.json()["username"] == "admin"

        assert client.post("/api/auth/logout").status_code == 204
        assert client.get("/api/auth/me").status_code == 401

    def test_wrong_password(self, client, admin):
        resp = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
        assert resp.status_code == 401

    def test_inactive_user_cannot_login(self, client, user_factory):
        user_factory("ghost", UserRole.ADMIN, active=False)
        resp = client.post("/api/auth/login", json={"username": "ghost", "password": "secret-pass"})
        assert resp.status_code == 401


class TestTasks:
    def test_create_and_list(self, admin_client):
        project = admin_client.post("/api/projects/", json={"name": "Highway"}).json()
        resp = admin_client.post(
            "/api/tasks/",
            json={"title": "Merges", "dataco_number": "DATACO-42", "project_id": project["id"]},
        )
        assert resp.status_code == 201
        task = resp.json()
        assert task["dataco_number"] == "42"
        assert task["amount_needed"] == 0

        listed = admin_client.get("/api/tasks/", params={"project_id": project["id"]}).json()
        assert [item["id"] for item in listed] == [task["id"]]

    def test_duplicate_dataco_number(self, admin_client, task_factory):
        task_factory("42")
        resp = admin_client.post("/api/tasks/", json={"title": "x", "dataco_number": "42"})
        assert resp.status_code == 409

    def test_create_requires_admin(self, user_factory, login_as):
        user_factory("manager", UserRole.DATA_MANAGER)
        client = login_as("manager")
        resp = client.post("/api/tasks/", json={"title": "x", "dataco_number": "1"})
        assert resp.status_code == 403

    def test_missing_task(self, client):
        assert client.get("/api/tasks/999").status_code == 404

    def test_calculate_amount(self, admin_client, db, task_factory):
        task = task_factory("100")
        db.add_all(
            [
                Subtask(task_id=task.id, title="a", dataco_number="1", type=SubtaskType.EVENTS, amount_needed=3),
                Subtask(task_id=task.id, title="b", dataco_number="2", type=SubtaskType.LOOPS, amount_needed=4),
            ]
        )
        db.commit()

        resp = admin_client.post(f"/api/tasks/{task.id}/calculate-amount")
        assert resp.status_code == 200
        assert resp.json() == {"task_id": task.id, "amount_needed": 7.0}

        subtasks = admin_client.get(f"/api/tasks/{task.id}/subtasks").json()
        assert [item["dataco_number"] for item in subtasks] == ["1", "2"]
        assert subtasks[1]["type"] == "loops"
