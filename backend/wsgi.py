# backend/wsgi.py
from posgo import create_app

app = create_app()
