import uvicorn
import os
import sys

# Ensure usage of the current directory for imports
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from svpg.config.settings import settings

if __name__ == "__main__":
    print(f"🚀 Starting {settings.APP_NAME} on port {settings.PORT}...")
    uvicorn.run("svpg.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
