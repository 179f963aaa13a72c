"""
Vercel entry point for the Nebula Maintenance API
"""
import os

os.environ.setdefault("ENVIRONMENT", "production")

from mangum import Mangum

from nebula_api.main import app

# Lifespan runs on cold start so the store engine and clients exist
handler = Mangum(app, lifespan="auto")
