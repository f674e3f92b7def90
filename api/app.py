"""
HTTP front end for range-of-motion calibration and pull-amount scaling.

Rehab stations upload a recorded movement to ``/calibration`` to get ROM bounds
and use ``/scaling`` to preview how raw distances map to pull amounts.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from api.routes import calibration as calibration_routes
from romdetect import __version__

DESCRIPTION = (
    "Detects turning points in distance-sensor recordings, derives range-of-motion "
    "bounds from them and scales raw readings into a 0-1 pull amount."
)


def create_app() -> FastAPI:
    app = FastAPI(title="romdetect", description=DESCRIPTION, version=__version__)
    app.include_router(calibration_routes.router)

    @app.get("/", include_in_schema=False)
    async def docs_redirect() -> RedirectResponse:
        return RedirectResponse(url="/docs")

    return app


app = create_app()
