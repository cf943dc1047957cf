# config.py
# Flask application configuration

import os

class Config:
    # Absolute paths next to the application
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f'sqlite:///{os.path.join(BASE_DIR, "instance", "baete_evaluations.db")}'
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.environ.get('SECRET_KEY', 'your-secret-key-change-me')  # Replace with a random key in production

    # Static evaluation template, read once at startup
    CRITERIA_DATA_PATH = os.environ.get('CRITERIA_DATA_PATH', os.path.join(BASE_DIR, 'criteria_data.json'))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    PORT = int(os.environ.get('PORT', 3000))
