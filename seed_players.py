# seed_players.py
import sys

from dotenv import load_dotenv

load_dotenv()

from app import create_app, init_db
from app.helpers.roster import SqlRosterStore, seed_sample_roster

def main(extra_players=0):
    app = create_app()
    init_db(app)

    with app.app_context():
        roster = SqlRosterStore()
        print(f"Existing players: {len(roster.list())}")

        added = seed_sample_roster(roster)
        for i in range(extra_players):
            roster.add(f"Test Player {i + 1}")

        print(f"Added {added + extra_players}; now have {len(roster.list())} players.")

if __name__ == "__main__":
    main(int(sys.argv[1]) if len(sys.argv) > 1 else 0)
