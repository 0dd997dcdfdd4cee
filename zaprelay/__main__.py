import uvicorn

from zaprelay.config import settings

if __name__ == "__main__":
    uvicorn.run("zaprelay.main:app", host="0.0.0.0", port=settings.port, reload=settings.debug)
