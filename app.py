# app.py
# Flask application built with the Application Factory pattern

import logging
import os

import click
from flask import Flask

from config import Config
from criteria_template import CriteriaTemplate
from extensions import db, migrate, cors

# Models must be imported here so that Alembic (Migrate) can see them
from models import Evaluation, Criterion, SubCriterion, Response


LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'


def create_app(config_class=Config):
    logging.basicConfig(level=config_class.LOG_LEVEL, format=LOG_FORMAT)

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # The template is read once and shared, read-only, by every request
    app.extensions['criteria_template'] = CriteriaTemplate.load(app.config['CRITERIA_DATA_PATH'])

    # --- Bind extensions to this app instance ---
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r'/api/*': {'origins': '*'}})

    # --- Blueprints ---
    from routes.api import api_bp
    from routes.main import main_bp

    app.register_blueprint(api_bp)
    app.register_blueprint(main_bp)

    # Create the schema on first start
    os.makedirs(app.instance_path, exist_ok=True)
    with app.app_context():
        db.create_all()

    app.logger.info('Database: %s', app.config['SQLALCHEMY_DATABASE_URI'])

    @app.cli.command('seed')
    @click.option('--count', default=2, show_default=True, help='Number of demo evaluations.')
    def seed_command(count):
        """Replace all data with demo evaluations."""
        from seed_data import seed_demo_data
        created = seed_demo_data(count)
        click.echo(f'Created {len(created)} demo evaluations.')

    return app


if __name__ == '__main__':
    app = create_app()
    print(f"BAETE Evaluator server running on http://localhost:{app.config['PORT']}")
    try:
        app.run(port=app.config['PORT'])
    finally:
        print('Shutting down server...')
        with app.app_context():
            db.engine.dispose()
        print('Database connection closed.')
