"""
Landing page route
"""

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

router = APIRouter()

@router.get("/", include_in_schema=False)
async def index(request: Request):
    index_path = request.app.state.static_dir / "index.html"
    if not index_path.is_file():
        raise HTTPException(status_code=404, detail="Landing page not found")
    return FileResponse(index_path, media_type="text/html")
