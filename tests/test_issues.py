import pytest

from hotel_ops.models.issue import Issue
from hotel_ops.models.log import Log, LogAction, LogTarget


@pytest.fixture()
def issues_url(room, title):
    return f"/api/rooms/{room['id']}/titles/{title['id']}/issues"


@pytest.fixture()
def issue(client, staff_headers, issues_url):
    resp = client.post(issues_url, json={"description": "Leaky faucet"}, headers=staff_headers)
    assert resp.status_code == 201
    return resp.json()


def test_create_issue(client, db, staff_user, issue, title):
    assert issue["description"] == "Leaky faucet"
    assert issue["title_id"] == title["id"]
    assert issue["created_by"]["username"] == "awed"

    entry = db.query(Log).filter(Log.target == LogTarget.ISSUE).one()
    assert entry.action == LogAction.CREATE
    assert entry.user_id == staff_user.id
    assert entry.target_id == issue["id"]
    assert entry.details == 'Room 101: Created issue "Leaky faucet" under category "Plumbing"'


def test_create_issue_missing_title(client, staff_headers, room):
    resp = client.post(
        f"/api/rooms/{room['id']}/titles/999/issues",
        json={"description": "x"},
        headers=staff_headers,
    )
    assert resp.status_code == 404
    assert resp.json()["message"] == "Issue, room, or title not found"


def test_create_issue_title_from_other_room(client, staff_headers, title):
    other = client.post("/api/rooms", json={"number": "102", "type": "Standard"}, headers=staff_headers).json()
    resp = client.post(
        f"/api/rooms/{other['id']}/titles/{title['id']}/issues",
        json={"description": "x"},
        headers=staff_headers,
    )
    assert resp.status_code == 404


def test_create_issue_requires_description(client, staff_headers, issues_url):
    assert client.post(issues_url, json={}, headers=staff_headers).status_code == 400


def test_list_and_get_issue(client, staff_headers, issues_url, issue):
    listed = client.get(issues_url, headers=staff_headers).json()
    assert [i["id"] for i in listed] == [issue["id"]]

    resp = client.get(f"{issues_url}/{issue['id']}", headers=staff_headers)
    assert resp.status_code == 200
    assert resp.json()["description"] == "Leaky faucet"


def test_get_missing_issue(client, staff_headers, issues_url):
    assert client.get(f"{issues_url}/999", headers=staff_headers).status_code == 404


def test_update_issue_round_trip(client, db, staff_headers, room, issues_url, issue):
    resp = client.put(
        f"{issues_url}/{issue['id']}",
        json={"description": "Faucet replaced, still dripping"},
        headers=staff_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["description"] == "Faucet replaced, still dripping"

    titles = client.get(f"/api/rooms/{room['id']}/titles", headers=staff_headers).json()
    assert titles[0]["issues"][0]["description"] == "Faucet replaced, still dripping"

    entry = db.query(Log).filter(Log.action == LogAction.UPDATE, Log.target == LogTarget.ISSUE).one()
    assert '"Leaky faucet"' in entry.details
    assert '"Faucet replaced, still dripping"' in entry.details
    assert entry.details.startswith("Room 101:")


def test_update_missing_issue(client, staff_headers, issues_url):
    resp = client.put(f"{issues_url}/999", json={"description": "x"}, headers=staff_headers)
    assert resp.status_code == 404


def test_delete_issue(client, db, staff_headers, issues_url, issue):
    resp = client.delete(f"{issues_url}/{issue['id']}", headers=staff_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Issue deleted successfully"}
    assert db.query(Issue).count() == 0

    entry = db.query(Log).filter(Log.action == LogAction.DELETE).one()
    assert entry.details == 'Room 101: Deleted issue "Leaky faucet" from category "Plumbing"'
    assert entry.target_id == issue["id"]


def test_issue_creator_removed_keeps_issue(client, db, make_user, headers_for, issues_url):
    temp = make_user("temp")
    resp = client.post(issues_url, json={"description": "Broken lamp"}, headers=headers_for(temp))
    assert resp.status_code == 201
    db.delete(temp)
    db.commit()

    listed = client.get(issues_url, headers=headers_for(temp)).json()
    assert listed[0]["description"] == "Broken lamp"


def test_create_issue_rejects_blank_description(client, db, staff_headers, issues_url):
    resp = client.post(issues_url, json={"description": "   "}, headers=staff_headers)
    assert resp.status_code == 400
    assert db.query(Issue).count() == 0


def test_update_issue_rejects_blank_description(client, db, staff_headers, issues_url, issue):
    resp = client.put(f"{issues_url}/{issue['id']}", json={"description": " \n "}, headers=staff_headers)
    assert resp.status_code == 400
    assert db.query(Issue).one().description == "Leaky faucet"
