# api/index.py
from app import create_app

# Serverless entry point; the platform serves this module-level app
app = create_app()
