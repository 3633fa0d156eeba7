import uvicorn
from lab_portal.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "lab_portal.main:app",
        host="0.0.0.0",
        port=8000,
        reload=False,
        workers=1,
        log_level=settings.log_level.lower(),
        access_log=True
    )
