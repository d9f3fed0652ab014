"""
Load test for the pickup game API.
Fires concurrent (and repeated) accept/decline responses at one game and
checks the waterfall never double-invites or double-confirms.
"""

import asyncio
import random
import time
from collections import Counter

import aiohttp

# -----------------------------
# CONFIG - ADJUST IF NEEDED
# -----------------------------
BASE_URL = "http://127.0.0.1:5000"

# Seeded sample players p1..p15
PLAYER_IDS = [f"p{i}" for i in range(1, 16)]

PLAYERS_NEEDED = 5

# How many times each invitee hammers the respond endpoint
REPEATS_PER_PLAYER = 4

# Rounds of responding; each round picks up invites the last one backfilled
ROUNDS = 6


# -----------------------------
# Load test functions
# -----------------------------
async def act_as(session, candidate_id):
    async with session.post(f"{BASE_URL}/api/me", json={"candidate_id": candidate_id}) as resp:
        if resp.status != 200:
            raise RuntimeError(f"could not switch to {candidate_id}: {resp.status}")


async def create_game(session):
    payload = {
        "date": "2024-06-01",
        "time": "18:00",
        "location": "Load Test Court",
        "players_needed": PLAYERS_NEEDED,
        "priority_list": PLAYER_IDS,
    }
    async with session.post(f"{BASE_URL}/api/games", json=payload) as resp:
        body = await resp.json()
        if resp.status != 201:
            raise RuntimeError(f"create failed: {resp.status} {body}")
        return body["game"]


async def submit_response(session, game_id, decision):
    try:
        async with session.post(f"{BASE_URL}/api/games/{game_id}/respond", json={"decision": decision}) as resp:
            text = await resp.text()
            if resp.status not in (200, 409):
                print(f"[ERROR {resp.status}] {game_id} {decision} :: {text[:200]}")
            return resp.status
    except aiohttp.ClientError as e:
        print(f"[EXCEPTION] {e} :: {game_id} {decision}")
        return None


async def fetch_game(session, game_id):
    async with session.get(f"{BASE_URL}/api/games/{game_id}") as resp:
        return (await resp.json())["game"]


async def main():
    statuses = Counter()

    async with aiohttp.ClientSession(cookie_jar=aiohttp.CookieJar(unsafe=True)) as organizer:
        game = await create_game(organizer)
        game_id = game["id"]
        print(f"Created {game_id} inviting {len(game['invites'])} players")

        # One client session (cookie jar) per player so each acts as themself;
        # unsafe=True lets the jar keep cookies from a bare IP host
        sessions = {}
        start = time.time()
        try:
            for pid in PLAYER_IDS:
                sessions[pid] = aiohttp.ClientSession(cookie_jar=aiohttp.CookieJar(unsafe=True))
                await act_as(sessions[pid], pid)

            for _ in range(ROUNDS):
                game = await fetch_game(organizer, game_id)
                pending = [inv["playerId"] for inv in game["invites"] if inv["status"] == "pending"]
                if not pending:
                    break

                tasks = []
                for pid in pending:
                    decision = random.choice(["accept", "decline"])
                    for _ in range(REPEATS_PER_PLAYER):
                        tasks.append(submit_response(sessions[pid], game_id, decision))

                random.shuffle(tasks)
                for status in await asyncio.gather(*tasks):
                    statuses[status] += 1
        finally:
            for s in sessions.values():
                await s.close()

        end = time.time()
        game = await fetch_game(organizer, game_id)

    invited = [inv["playerId"] for inv in game["invites"]]
    print(f"Completed in {end - start:.2f} seconds, statuses {dict(statuses)}")
    print(f"Confirmed {len(game['confirmed'])}/{game['playersNeeded']}, declined {len(game['declined'])}")

    if len(invited) != len(set(invited)):
        print("[FAIL] duplicate invites")
    if len(game["confirmed"]) > game["playersNeeded"]:
        print("[FAIL] confirmed over headcount")
    terminal = sum(1 for inv in game["invites"] if inv["status"] != "pending")
    if terminal != len(game["confirmed"]) + len(game["declined"]):
        print("[FAIL] invite statuses out of step with confirmed/declined")


if __name__ == "__main__":
    asyncio.run(main())
