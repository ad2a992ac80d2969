# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
FastAPI application for the Sokoban Environment.

This module creates an HTTP server that exposes the SokobanEnvironment
over HTTP endpoints.

Configuration (environment variables):
    SOKOBAN_LEVEL       level text played by default
    SOKOBAN_MAX_STEPS   steps per episode (default: 200)
    SOKOBAN_LOG_FILE    also write logs to this file
    SOKOBAN_LOG_LEVEL   logging level (default: INFO)
    SOKOBAN_HOST        bind address (default: 0.0.0.0)
    SOKOBAN_PORT        bind port (default: 8000)

Usage:
    # Development (with auto-reload):
    uvicorn envs.sokoban_engine.server.app:app --reload --host 0.0.0.0 --port 8000

    # Or run directly:
    python -m envs.sokoban_engine.server.app
"""

import logging
import os
from contextlib import asynccontextmanager
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from ..errors import InvalidLevelError
from ..models import SokobanAction, SokobanObservation
from .sokoban_environment import DEFAULT_LEVEL, SokobanEnvironment

handlers = [logging.StreamHandler()]
log_file = os.environ.get("SOKOBAN_LOG_FILE")
if log_file:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    handlers.append(logging.FileHandler(log_file))

logging.basicConfig(
    level=os.environ.get("SOKOBAN_LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=handlers,
)
logger = logging.getLogger(__name__)


class ActionPayload(BaseModel):
    direction: Literal["up", "down", "left", "right"]


class StepRequest(BaseModel):
    action: ActionPayload


class ResetRequest(BaseModel):
    level: Optional[str] = None


def _serialize(observation: SokobanObservation) -> Dict[str, Any]:
    """Split an observation into the observation/reward/done response body."""
    data = asdict(observation)
    reward = data.pop("reward")
    done = data.pop("done")
    return {"observation": data, "reward": reward, "done": done}


def create_app(env: SokobanEnvironment) -> FastAPI:
    """
    Build the HTTP app around one environment instance.

    Requests are not serialized; concurrent clients share the same episode.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Sokoban server starting up.")
        yield
        logger.info("Sokoban server shutting down.")

    app = FastAPI(title="Sokoban Environment", lifespan=lifespan)

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "healthy"}

    @app.post("/reset")
    def reset(request: Optional[ResetRequest] = None) -> Dict[str, Any]:
        level = request.level if request is not None else None
        try:
            observation = env.reset(level_text=level)
        except InvalidLevelError as e:
            logger.warning(f"Rejected level on reset: {e}")
            raise HTTPException(status_code=400, detail=str(e)) from e
        return _serialize(observation)

    @app.post("/step")
    def step(request: StepRequest) -> Dict[str, Any]:
        observation = env.step(SokobanAction(direction=request.action.direction))
        return _serialize(observation)

    @app.post("/undo")
    def undo() -> Dict[str, Any]:
        return _serialize(env.undo())

    @app.get("/state")
    def state() -> Dict[str, Any]:
        return asdict(env.state)

    return app


# Create the environment instance
env = SokobanEnvironment(
    level_text=os.environ.get("SOKOBAN_LEVEL", DEFAULT_LEVEL),
    max_steps=int(os.environ.get("SOKOBAN_MAX_STEPS", "200")),
)

app = create_app(env)


def main() -> None:
    import uvicorn

    uvicorn.run(
        app,
        host=os.environ.get("SOKOBAN_HOST", "0.0.0.0"),
        port=int(os.environ.get("SOKOBAN_PORT", "8000")),
    )


if __name__ == "__main__":
    main()
