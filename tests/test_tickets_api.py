from conftest import auth, register


def create(client, token, **body):
    r = client.post("/tickets", json=body, headers=auth(token))
    assert r.status_code == 201, r.text
    return r.json()


def test_requests_without_token_are_rejected(client):
    for method, path in [("get", "/tickets"), ("get", "/tickets/all"), ("get", "/tickets/x"),
                         ("patch", "/tickets/markAsClosed/x"), ("delete", "/tickets/x")]:
        r = getattr(client, method)(path)
        assert r.status_code == 401, path
        assert r.json()["detail"] == "Please authenticate"


def test_garbage_token_is_rejected(client):
    r = client.get("/tickets", headers=auth("not-a-jwt"))
    assert r.status_code == 401


def test_refresh_token_cannot_be_used_as_bearer(client):
    r = client.post("/auth/register", json={"username": "sam", "password": "password123"})
    refresh = r.json()["tokens"]["refresh"]["token"]
    assert client.get("/tickets", headers=auth(refresh)).status_code == 401


def test_employee_cannot_manage_tickets(client, admin, employee):
    _, admin_token = admin
    user, token = employee
    t = create(client, admin_token, title="Fix login", assignedTo=user["id"])

    assert client.get("/tickets", headers=auth(token)).status_code == 200
    r = client.post("/tickets", json={"title": "mine", "assignedTo": user["id"]}, headers=auth(token))
    assert r.status_code == 403
    assert r.json()["detail"] == "Forbidden"
    assert client.delete(f"/tickets/{t['id']}", headers=auth(token)).status_code == 403


def test_fix_login_scenario(client, admin, employee):
    _, admin_token = admin
    user, token = employee

    t = create(client, admin_token, title="Fix login", assignedTo=user["id"], priority="low")
    assert t["status"] == "open"
    assert t["isDeleted"] is False
    assert t["assignedTo"] == {"id": user["id"], "username": "employee1", "role": "employee"}

    r = client.patch(f"/tickets/markAsClosed/{t['id']}", headers=auth(token))
    assert r.status_code == 200
    assert r.text == "Ticket closed successfully"

    r = client.get(f"/tickets/{t['id']}", headers=auth(token))
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "close"
    assert body["closedBy"] == user["id"]


def test_defaults_when_only_title_and_assignee_given(client, admin, employee):
    _, admin_token = admin
    user, _ = employee
    t = create(client, admin_token, title="Defaults", assignedTo=user["id"])
    assert (t["status"], t["priority"], t["isDeleted"]) == ("open", "low", False)
    assert t["closedBy"] is None and t["deletedBy"] is None
    assert "_id" not in t


def test_high_priority_blocks_close(client, admin, employee):
    _, admin_token = admin
    user, token = employee
    a = create(client, admin_token, title="A", assignedTo=user["id"], priority="high")
    b = create(client, admin_token, title="B", assignedTo=user["id"], priority="low")

    r = client.patch(f"/tickets/markAsClosed/{b['id']}", headers=auth(token))
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "A higher priority task remains to be closed"
    assert [t["id"] for t in body["result"]] == [a["id"]]

    r = client.get(f"/tickets/{b['id']}", headers=auth(token))
    assert r.json()["status"] == "open"


def test_other_employee_may_not_close(client, admin, employee, other_employee):
    _, admin_token = admin
    user, _ = employee
    _, other_token = other_employee
    t = create(client, admin_token, title="Not yours", assignedTo=user["id"])

    r = client.patch(f"/tickets/markAsClosed/{t['id']}", headers=auth(other_token))
    assert r.status_code == 401
    assert r.json()["detail"] == "Not Allowed"


def test_admin_may_close_any_ticket(client, admin, employee):
    admin_user, admin_token = admin
    user, _ = employee
    t = create(client, admin_token, title="Cleanup", assignedTo=user["id"], priority="medium")
    r = client.patch(f"/tickets/markAsClosed/{t['id']}", headers=auth(admin_token))
    assert r.status_code == 200
    assert client.get(f"/tickets/{t['id']}", headers=auth(admin_token)).json()["closedBy"] == admin_user["id"]


def test_missing_tickets_are_404(client, admin):
    _, token = admin
    assert client.get("/tickets/nope", headers=auth(token)).status_code == 404
    assert client.patch("/tickets/markAsClosed/nope", headers=auth(token)).status_code == 404
    assert client.delete("/tickets/nope", headers=auth(token)).status_code == 404


def test_delete_hides_ticket(client, admin, employee):
    _, admin_token = admin
    user, _ = employee
    t = create(client, admin_token, title="Old", assignedTo=user["id"])

    r = client.delete(f"/tickets/{t['id']}", headers=auth(admin_token))
    assert r.status_code == 204
    assert r.content == b""

    assert client.get(f"/tickets/{t['id']}", headers=auth(admin_token)).status_code == 404
    assert client.delete(f"/tickets/{t['id']}", headers=auth(admin_token)).status_code == 404
    assert client.get("/tickets/all", headers=auth(admin_token)).json()["totalResults"] == 0


def test_invalid_input_is_400(client, admin, employee):
    _, admin_token = admin
    user, _ = employee
    h = auth(admin_token)
    assert client.post("/tickets", json={"title": "x", "assignedTo": user["id"], "priority": "urgent"}, headers=h).status_code == 400
    assert client.post("/tickets", json={"title": "x", "assignedTo": user["id"], "status": "closed"}, headers=h).status_code == 400
    assert client.post("/tickets", json={"assignedTo": user["id"]}, headers=h).status_code == 400
    assert client.post("/tickets", json={"title": "", "assignedTo": user["id"]}, headers=h).status_code == 400
    assert client.get("/tickets?limit=0", headers=h).status_code == 400
    assert client.get("/tickets?page=0", headers=h).status_code == 400


def test_unknown_assignee_is_400(client, admin):
    _, token = admin
    r = client.post("/tickets", json={"title": "x", "assignedTo": "ghost"}, headers=auth(token))
    assert r.status_code == 400
    assert r.json()["detail"] == "Assigned user not found"


def test_list_all_paginates(client, admin, employee):
    _, admin_token = admin
    user, token = employee
    for i in range(3):
        create(client, admin_token, title=f"t{i}", assignedTo=user["id"])

    r = client.get("/tickets/all?limit=2&page=2", headers=auth(token))
    assert r.status_code == 200
    body = r.json()
    assert (body["page"], body["limit"], body["totalPages"], body["totalResults"]) == (2, 2, 2, 3)
    assert [t["title"] for t in body["results"]] == ["t2"]

    body = client.get("/tickets/all?limit=2&page=9", headers=auth(token)).json()
    assert body["results"] == []
    assert body["totalResults"] == 3


def test_empty_store_has_zero_pages(client, admin):
    _, token = admin
    body = client.get("/tickets/all", headers=auth(token)).json()
    assert body == {"results": [], "page": 1, "limit": 10, "totalPages": 0, "totalResults": 0}


def test_filters_and_sorting(client, admin, employee, other_employee):
    _, admin_token = admin
    u1, token = employee
    u2, _ = other_employee
    h = auth(admin_token)
    create(client, admin_token, title="alpha", assignedTo=u1["id"], priority="medium")
    create(client, admin_token, title="beta", assignedTo=u2["id"], priority="high")
    gamma = create(client, admin_token, title="gamma", assignedTo=u1["id"], priority="low")
    assert client.patch(f"/tickets/markAsClosed/{gamma['id']}", headers=auth(token)).status_code == 200

    body = client.get(f"/tickets?assignedTo={u1['id']}", headers=h).json()
    assert sorted(t["title"] for t in body["results"]) == ["alpha", "gamma"]
    assert all(t["assignedTo"]["id"] == u1["id"] for t in body["results"])

    body = client.get("/tickets?status=close", headers=h).json()
    assert [t["title"] for t in body["results"]] == ["gamma"]

    body = client.get("/tickets?priority=high", headers=h).json()
    assert [t["title"] for t in body["results"]] == ["beta"]

    body = client.get("/tickets?sortBy=title:desc", headers=h).json()
    assert [t["title"] for t in body["results"]] == ["gamma", "beta", "alpha"]

    t = body["results"][0]
    body = client.get(f"/tickets?ticketId={t['id']}", headers=h).json()
    assert [x["id"] for x in body["results"]] == [t["id"]]


def test_versioned_prefix(client, admin):
    _, token = admin
    assert client.get("/v1/tickets/all", headers=auth(token)).status_code == 200


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_tickets_cannot_be_created_closed(client, admin, employee):
    _, admin_token = admin
    user, token = employee
    h = auth(admin_token)

    r = client.post("/tickets", json={"title": "x", "assignedTo": user["id"], "status": "close"}, headers=h)
    assert r.status_code == 400
    assert client.get("/tickets/all", headers=h).json()["totalResults"] == 0

    t = create(client, admin_token, title="x", assignedTo=user["id"], status="open")
    assert (t["status"], t["closedBy"]) == ("open", None)


def test_large_limit_is_accepted(client, admin, employee):
    _, admin_token = admin
    user, _ = employee
    for i in range(3):
        create(client, admin_token, title=f"t{i}", assignedTo=user["id"])

    r = client.get("/tickets/all?limit=200", headers=auth(admin_token))
    assert r.status_code == 200
    body = r.json()
    assert (body["limit"], body["totalPages"], body["totalResults"]) == (200, 1, 3)
    assert len(body["results"]) == 3


def test_blocking_body_lists_full_tickets(client, admin, employee):
    _, admin_token = admin
    user, token = employee
    a = create(client, admin_token, title="A", assignedTo=user["id"], priority="high")

    r = client.patch(f"/tickets/markAsClosed/{a['id']}", headers=auth(token))
    assert r.status_code == 400
    [blocking] = r.json()["result"]
    assert (blocking["id"], blocking["priority"], blocking["status"]) == (a["id"], "high", "open")

    schema = client.get("/openapi.json").json()
    assert "BlockingTickets" in schema["components"]["schemas"]
