from fastapi import FastAPI
from schemagraph.core.env import configure_logging, load_env
from schemagraph.api import graph, health, schema

load_env()
configure_logging()

app = FastAPI(
    title="Schema Graph",
    version="0.1",
)

app.include_router(health.router, prefix="/health", tags=["Health"])
app.include_router(graph.router, prefix="/graph", tags=["Graph"])
app.include_router(schema.router, prefix="/schema", tags=["Schema"])
