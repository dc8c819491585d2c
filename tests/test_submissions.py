import asyncio
from datetime import datetime

import pytest

from tests.conftest import insert_contest, make_user, caller
from contesthub.services.contest.submission import SubmissionService
from contesthub.utils.errors import Conflict


async def test_register_twice_conflicts(client, db, member):
    contest_id = await insert_contest(db, "creator@example.com")

    first = await client.post(f"/contests/{contest_id}/register", headers=member)
    second = await client.post(f"/contests/{contest_id}/register", headers=member)

    contest = await db.contests.find_one({})
    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json()["message"] == "Already registered"
    assert contest["participants"] == ["member@example.com"]


async def test_register_missing_contest(client, member):
    missing = await client.post("/contests/64b000000000000000000000/register", headers=member)
    malformed = await client.post("/contests/bad-id/register", headers=member)

    assert missing.status_code == 404
    assert malformed.status_code == 400


async def test_concurrent_registrations_are_all_kept(db):
    contest_id = await insert_contest(db, "creator@example.com")
    service = SubmissionService(db)
    emails = [f"user{i}@example.com" for i in range(5)]

    await asyncio.gather(*(service.register_participant(email, contest_id) for email in emails))

    contest = await db.contests.find_one({})
    assert sorted(contest["participants"]) == emails


async def test_submit_requires_registration(client, db, member):
    contest_id = await insert_contest(db, "creator@example.com")

    response = await client.post(f"/contests/{contest_id}/submit-task", json={"submission": "my entry"},
                                 headers=member)

    assert response.status_code == 403
    assert response.json()["message"] == "You are not registered for this contest"


async def test_submit_rejects_empty_payload(client, db, member):
    contest_id = await insert_contest(db, "creator@example.com", participants=["member@example.com"])

    missing = await client.post(f"/contests/{contest_id}/submit-task", json={}, headers=member)
    blank = await client.post(f"/contests/{contest_id}/submit-task", json={"submission": "  "}, headers=member)
    zero = await client.post(f"/contests/{contest_id}/submit-task", json={"submission": 0}, headers=member)
    false = await client.post(f"/contests/{contest_id}/submit-task", json={"submission": False}, headers=member)

    assert missing.status_code == 400
    assert blank.status_code == 400
    assert zero.status_code == 400
    assert false.status_code == 400


async def test_submit_appends_entries(client, db, member):
    contest_id = await insert_contest(db, "creator@example.com", status="rejected",
                                      participants=["member@example.com"])

    first = await client.post(f"/contests/{contest_id}/submit-task", json={"submission": "http://drive/1"},
                              headers=member)
    second = await client.post(f"/contests/{contest_id}/submit-task",
                               json={"submission": {"link": "http://drive/2"}}, headers=member)

    contest = await db.contests.find_one({})
    assert first.status_code == 201
    assert second.status_code == 201
    assert [s["submission"] for s in contest["submissions"]] == ["http://drive/1", {"link": "http://drive/2"}]
    assert contest["submissions"][0]["userEmail"] == "member@example.com"
    assert contest["submissions"][0]["participantName"] == "Max Member"
    assert "status" not in contest["submissions"][0]


async def test_declare_winner_once(client, db, creator):
    contest_id = await insert_contest(
        db,
        "creator@example.com",
        participants=["x@example.com", "y@example.com"],
        submissions=[
            {"userEmail": "x@example.com", "submission": "a", "submittedAt": datetime(2030, 1, 1)},
            {"userEmail": "y@example.com", "submission": "b", "submittedAt": datetime(2030, 1, 2)},
            {"userEmail": "x@example.com", "submission": "c", "submittedAt": datetime(2030, 1, 3)},
        ]
    )

    first = await client.put(f"/contests/{contest_id}/declare-winner", json={"userEmail": "X@example.com"},
                             headers=creator)
    second = await client.put(f"/contests/{contest_id}/declare-winner", json={"userEmail": "y@example.com"},
                              headers=creator)

    contest = await db.contests.find_one({})
    assert first.status_code == 200
    assert second.status_code == 409
    assert [s.get("status") for s in contest["submissions"]] == ["winner", None, "winner"]


async def test_declare_winner_requires_owner(client, db):
    other = await make_user(db, "other@example.com", role="creator")
    contest_id = await insert_contest(
        db,
        "creator@example.com",
        submissions=[{"userEmail": "x@example.com", "submission": "a", "submittedAt": datetime(2030, 1, 1)}]
    )

    response = await client.put(f"/contests/{contest_id}/declare-winner", json={"userEmail": "x@example.com"},
                                headers=other)

    assert response.status_code == 403


async def test_declare_winner_errors(client, db, creator, member):
    contest_id = await insert_contest(db, "creator@example.com")

    no_submissions = await client.put(f"/contests/{contest_id}/declare-winner",
                                      json={"userEmail": "x@example.com"}, headers=creator)
    no_email = await client.put(f"/contests/{contest_id}/declare-winner", json={}, headers=creator)
    missing = await client.put("/contests/64b000000000000000000000/declare-winner",
                               json={"userEmail": "x@example.com"}, headers=creator)
    not_creator = await client.put(f"/contests/{contest_id}/declare-winner",
                                   json={"userEmail": "x@example.com"}, headers=member)

    assert no_submissions.status_code == 400
    assert no_email.status_code == 400
    assert missing.status_code == 404
    assert not_creator.status_code == 403


async def test_declare_winner_conflicts_when_submissions_changed(db):
    contest_id = await insert_contest(
        db,
        "creator@example.com",
        submissions=[{"userEmail": "x@example.com", "submission": "a", "submittedAt": datetime(2030, 1, 1)}]
    )
    service = SubmissionService(db)
    original_get = service.contest_service.get_contest

    async def stale_get(contest_id):
        contest = await original_get(contest_id)
        # Another entry lands after the contest was read
        await db.contests.update_one(
            {"_id": contest["_id"]},
            {"$push": {"submissions": {"userEmail": "y@example.com", "submission": "b"}}}
        )
        return contest

    service.contest_service.get_contest = stale_get

    with pytest.raises(Conflict):
        await service.declare_winner(caller("creator@example.com", "creator"), contest_id, "x@example.com")

    contest = await db.contests.find_one({})
    assert all(s.get("status") != "winner" for s in contest["submissions"])
    assert len(contest["submissions"]) == 2


async def test_list_submissions(client, db, creator, member):
    contest_id = await insert_contest(
        db,
        "creator@example.com",
        submissions=[
            {"userEmail": "x@example.com", "participantName": "Xena", "submission": "a",
             "submittedAt": datetime(2030, 1, 1), "status": "winner"},
            {"userEmail": "y@example.com", "submission": "b", "submittedAt": datetime(2030, 1, 2)},
        ]
    )

    owner = await client.get(f"/contests/{contest_id}/submissions", headers=creator)
    not_creator = await client.get(f"/contests/{contest_id}/submissions", headers=member)

    assert owner.status_code == 200
    assert owner.json()["data"]["submissions"] == [
        {"participantName": "Xena", "participantEmail": "x@example.com", "taskInfo": "a",
         "submittedAt": "2030-01-01T00:00:00", "isWinner": True},
        {"participantName": "Anonymous", "participantEmail": "y@example.com", "taskInfo": "b",
         "submittedAt": "2030-01-02T00:00:00", "isWinner": False},
    ]
    assert not_creator.status_code == 403


async def test_list_submissions_of_other_creator(client, db, creator):
    contest_id = await insert_contest(db, "someone@example.com")

    response = await client.get(f"/contests/{contest_id}/submissions", headers=creator)

    assert response.status_code == 403
    assert response.json()["message"] == "Not authorized"
