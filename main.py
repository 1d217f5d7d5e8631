"""
FastAPI应用主入口
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from api.middleware import LoggingMiddleware, RequestIDMiddleware
from api.routes import payments as payments_routes
from core.config import settings
from core.exceptions import register_exception_handlers
from core.logging_config import configure_logging, get_logger
from core.response import success_response
from infrastructure.adapters.event_publisher import build_broker_event_publisher
from infrastructure.database import create_tables, dispose_engine


# 在入口处显式配置日志，避免模块导入时的副作用
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    if settings.database.auto_create_tables:
        await create_tables()
        logger.info("database_initialized", tables=["payments", "events"])
    else:
        logger.info("database_bootstrap_skipped")

    # 每次发布独立建立连接，这里只装配发布器
    app.state.event_publisher = build_broker_event_publisher(settings.rabbitmq)
    logger.info(
        "event_publisher_ready",
        host=settings.rabbitmq.host,
        port=settings.rabbitmq.port,
        queue=settings.rabbitmq.queue,
    )

    yield

    await app.state.event_publisher.aclose()
    await dispose_engine()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
    description="Payment lifecycle service: persistence, event log and broker notification",
)

# 中间件按添加的逆序执行：RequestID 最外层，为日志提供 request_id
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(payments_routes.router, prefix=settings.API_PREFIX)


@app.get("/", tags=["Root"])
async def root():
    """API根路径"""
    return success_response(
        data={
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "docs": "/docs",
        },
        message="Welcome to the payments API",
    )


@app.get("/health", tags=["Health"])
async def health_check():
    return success_response(data={"status": "healthy"}, message="OK")


if settings.METRICS_ENABLED:

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Prometheus 文本格式指标"""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
