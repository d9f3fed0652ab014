from dotenv import load_dotenv

load_dotenv()

from app import create_app, init_db

api = create_app()

# Run DB bootstrap once at startup
init_db(api)

if __name__ == "__main__":
    api.run(debug=True)
