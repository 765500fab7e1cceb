import asyncio
import logging
import sys
import time
from fastapi import FastAPI, HTTPException
from typing import List, Optional
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from intersection_sim.kernel.simulation_kernel import SimulationKernel
from intersection_sim.application.commands import (
    UpdateConfigCommand, SetRunningCommand, ResetCommand, SpawnVehicleCommand
)
from intersection_sim.domain.models import (
    ConfigUpdate, SimulationConfig, SimulationSnapshot, SimulationStats, SpawnRequest, TrafficLight
)
from intersection_sim.domain import config

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

# Initialize Kernel
kernel = SimulationKernel()

# Background task for simulation loop
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Start the simulation loop
    kernel.initialize() # Deterministic seed
    loop_task = asyncio.create_task(run_simulation())
    logger.info("Simulation loop started")
    yield
    # Shutdown
    loop_task.cancel()
    logger.info("Simulation loop stopped")

app = FastAPI(title="Intersection Signal Simulator", lifespan=lifespan)

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

async def run_simulation():
    """Runs the simulation update loop at ~20Hz"""
    dt = config.FRAME_DT

    while True:
        start_time = time.time()

        # Update simulation (deterministic step)
        kernel.step(dt)

        # Sleep to maintain frame rate
        elapsed = time.time() - start_time
        sleep_time = max(0.0, dt - elapsed)
        await asyncio.sleep(sleep_time)

@app.get("/api/simulation/state", response_model=SimulationSnapshot)
async def get_simulation_state():
    """Returns vehicles, lights and statistics as of the last step"""
    return kernel.get_state()

@app.get("/api/simulation/stats", response_model=SimulationStats)
async def get_simulation_stats():
    """Returns the statistics snapshot refreshed on the last macro tick"""
    return kernel.get_stats()

@app.get("/api/simulation/lights", response_model=List[TrafficLight])
async def get_lights():
    """Returns the north-south and east-west lights"""
    return kernel.get_lights()

@app.get("/api/simulation/lights/{axis}", response_model=TrafficLight)
async def get_light(axis: str):
    """Returns a single light by axis ("ns" or "ew")"""
    for light in kernel.get_lights():
        if light.axis.value == axis:
            return light
    raise HTTPException(status_code=404, detail="Light not found")

@app.get("/api/simulation/config", response_model=SimulationConfig)
async def get_config():
    """Returns the active configuration"""
    return kernel.get_config()

@app.post("/api/simulation/config")
async def update_config(updates: ConfigUpdate):
    """Queues a configuration change; it applies at the start of the next step"""
    kernel.queue_command(UpdateConfigCommand(updates))
    return {"status": "Configuration queued", "updates": updates.model_dump(exclude_none=True)}

@app.post("/api/simulation/pause")
async def pause_simulation():
    kernel.queue_command(SetRunningCommand(False))
    return {"status": "Pause queued"}

@app.post("/api/simulation/resume")
async def resume_simulation():
    kernel.queue_command(SetRunningCommand(True))
    return {"status": "Resume queued"}

@app.post("/api/simulation/reset")
async def reset_simulation(seed: Optional[int] = None):
    """Clears vehicles, lights and statistics; configuration is kept"""
    kernel.queue_command(ResetCommand(seed))
    return {"status": "Reset queued", "seed": seed}

@app.post("/api/simulation/spawn")
async def spawn_vehicle(request: SpawnRequest):
    """Queues a vehicle on the requested approach, bypassing the density trial"""
    kernel.queue_command(SpawnVehicleCommand(request.direction, request.lane, request.type))
    return {"status": "Spawn queued"}

@app.get("/")
def read_root():
    return {"status": "Intersection Signal Simulator Running (Deterministic Kernel)"}

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("intersection_sim.main:app", host="0.0.0.0", port=8000)
