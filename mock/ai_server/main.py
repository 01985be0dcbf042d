"""Stub AI analysis service serving canned results per farm profile"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import json
import os
import re

from fastapi import FastAPI, HTTPException, Query

app = FastAPI(title="Mock AI Analysis Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path(os.environ.get("AI_STUB_DIR", Path(__file__).resolve().parents[1] / "ai_stub"))

_PROFILE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


def load_results(profile_id: str) -> dict:
    """Read the stub file for a profile; raises 404 for unknown profiles"""
    if not _PROFILE_ID.match(profile_id):
        raise HTTPException(status_code=404, detail="profile not found")
    file = DATA_DIR / f"results_{profile_id}.json"
    if not file.exists():
        raise HTTPException(status_code=404, detail="profile not found")
    return json.loads(file.read_text())


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/ai/results")
def get_results(profile_id: str, since: Optional[datetime] = Query(None)):
    """Analysis results for a profile, optionally only those processed at or after `since`"""
    payload = load_results(profile_id)
    results = payload.get("results", [])
    if since is not None:
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        results = [
            r for r in results
            if r.get("processed_at") and datetime.fromisoformat(r["processed_at"]) >= since
        ]
    return {"profile_id": payload.get("profile_id", profile_id), "results": results}
