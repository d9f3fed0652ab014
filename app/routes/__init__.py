from .index import index_bp
from .players import players_bp
from .games import games_bp

def register_blueprints(app):
    app.register_blueprint(index_bp)
    app.register_blueprint(players_bp)
    app.register_blueprint(games_bp)
