from fastapi import FastAPI
from compactl.api.routes import plan
from compactl.api.middleware import AuthMiddleware
from compactl.logging import setup_logger

logger = setup_logger("compactl.api")

app = FastAPI(title="compactl")
app.add_middleware(AuthMiddleware)

app.include_router(plan.router)

logger.info("compactl API ready")
