from fastapi import FastAPI
from fastapi.responses import JSONResponse
from app.routes import preview

app = FastAPI(title="Link Cards")

# Include routers
app.include_router(preview.router)


@app.get("/health")
async def health():
    """Lightweight health check for uptime pinging."""
    return JSONResponse({"status": "ok"})
