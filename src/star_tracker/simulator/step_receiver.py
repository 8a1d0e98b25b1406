"""
Actuator simulator.

Accepts the same POST /steps requests as the motor controller and keeps
the resulting motor positions, so the tracker can be exercised without
hardware.
"""

import argparse
import asyncio

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse
import uvicorn

from star_tracker.config import load_config, profile_from_config
from star_tracker.motion import MountProfile
from star_tracker.transport import CORS_HEADERS


class MotorState:
    """
    Accumulated motor positions in steps.

    Azimuth wraps at one revolution, altitude is kept as a signed count so
    it reads as a real elevation.
    """

    def __init__(self, profile: MountProfile):
        self.profile = profile
        self.azm = 0
        self.alt = 0
        self.commands = 0

    def apply(self, azm_steps: int, alt_steps: int) -> None:
        spr = self.profile.steps_per_revolution
        self.azm = (self.azm + azm_steps) % spr
        self.alt += alt_steps
        self.commands += 1

    def as_dict(self) -> dict:
        dps = self.profile.degrees_per_step
        return {
            "azimuthSteps": self.azm,
            "altitudeSteps": self.alt,
            "azimuth": self.azm * dps,
            "altitude": self.alt * dps,
            "commands": self.commands,
        }


def create_app(profile: MountProfile = None) -> FastAPI:
    """Builds the simulator application around a fresh motor state."""
    app = FastAPI(title="Star Tracker Actuator Simulator")
    state = MotorState(profile or MountProfile())
    app.state.motors = state

    @app.post("/steps")
    async def steps(
        azimuthMotorSteps: int = Query(...),
        altitudeMotorSteps: int = Query(...),
    ):
        state.apply(azimuthMotorSteps, altitudeMotorSteps)
        print(
            f"Simulator: AZM {azimuthMotorSteps:+d} ALT {altitudeMotorSteps:+d} "
            f"-> ({state.azm}, {state.alt})"
        )
        return JSONResponse(state.as_dict(), headers=CORS_HEADERS)

    @app.get("/position")
    async def position():
        return JSONResponse(state.as_dict(), headers=CORS_HEADERS)

    return app


async def main_async(argv=None):
    parser = argparse.ArgumentParser(description="Star Tracker Actuator Simulator")
    parser.add_argument("-c", "--config", help="Path to a YAML config file")
    parser.add_argument("--host", help="Listen address")
    parser.add_argument("-p", "--port", type=int, help="Listen port")
    args = parser.parse_args(argv)

    config = load_config(args.config)
    sim_cfg = config.get("simulator", {})
    host = args.host or sim_cfg.get("host", "127.0.0.1")
    port = args.port or sim_cfg.get("port", 8080)

    app = create_app(profile_from_config(config))
    print(f"Simulator: Listening on http://{host}:{port}")
    server = uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_level="error"))
    await server.serve()


def main():
    try:
        asyncio.run(main_async())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
