import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import settings
from app.core.errors import UserError, AllocationConflict
from app.core.logging import configurer_logging
from app.middleware.tenant_middleware import TenantMiddleware
from app.api.routes import clients, documents, entreprise

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Identification du tenant (token Bearer)
app.add_middleware(TenantMiddleware)


# ============ GESTION DES ERREURS ============

@app.exception_handler(UserError)
async def user_error_handler(_: Request, exc: UserError):
    """Erreurs métier : le message peut être renvoyé tel quel"""
    if isinstance(exc, AllocationConflict):
        logger.warning("Conflit de numérotation %s: %s", exc.cle, exc)
        return JSONResponse(status_code=409, content={"detail": str(exc), "type": "allocation_conflict"})
    return JSONResponse(status_code=400, content={"detail": str(exc), "type": "bad_request"})


@app.exception_handler(Exception)
async def general_exception_handler(_: Request, exc: Exception):
    logger.exception("Erreur inattendue: %s", exc)
    return JSONResponse(status_code=500, content={"detail": "Erreur interne du serveur"})


# Health check
@app.get("/health")
def health_check():
    """Health check pour la supervision"""
    return {"status": "healthy"}


@app.get("/")
def root():
    return {"name": settings.PROJECT_NAME, "docs": "/docs"}


# Routes
app.include_router(entreprise.router, prefix=f"{settings.API_V1_STR}/entreprise", tags=["entreprise"])
app.include_router(clients.router, prefix=f"{settings.API_V1_STR}/clients", tags=["clients"])
app.include_router(documents.router, prefix=f"{settings.API_V1_STR}/documents", tags=["documents"])


@app.on_event("startup")
def startup_event():
    configurer_logging(settings.LOG_LEVEL)
    logger.info("%s démarré (environnement: %s)", settings.PROJECT_NAME, settings.ENVIRONMENT)

    # Création des tables si absentes
    try:
        from app.database import engine
        from app.models.base import Base
        from app import models  # noqa: F401 - enregistre les modèles dans le metadata
        Base.metadata.create_all(bind=engine)
        logger.info("Tables créées/vérifiées")
    except Exception:
        logger.exception("Erreur à la création des tables")
        raise


@app.on_event("shutdown")
def shutdown_event():
    logger.info("%s arrêté", settings.PROJECT_NAME)
