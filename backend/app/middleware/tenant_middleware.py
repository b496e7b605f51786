from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from app.core.security import decode_access_token
from app.core.tenant_context import set_current_tenant_id, clear_current_tenant_id
from jose import JWTError


class TenantMiddleware(BaseHTTPMiddleware):
    """
    Middleware qui identifie le tenant de TOUTES les requêtes /api/

    Flux:
    1. Extrait le token JWT du header Authorization
    2. Décode le token et récupère tenant_id et user_id
    3. Les ajoute au contexte de la requête (request.state)
    4. Pose tenant_id dans le ContextVar (logs)

    Le token est émis par le fournisseur d'identité ; ce service ne fait
    que le vérifier.
    """

    # Routes publiques sous /api/
    PUBLIC_PATHS = [
        "/api/v1/openapi.json",
    ]

    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # Requêtes OPTIONS (preflight CORS) et tout ce qui n'est pas l'API
        if (request.method == "OPTIONS" or
            path in self.PUBLIC_PATHS or
            not path.startswith("/api/")):
            clear_current_tenant_id()
            return await call_next(request)

        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith("Bearer "):
            return JSONResponse(
                status_code=401,
                content={"detail": "Token d'authentification absent"}
            )

        token = auth_header.replace("Bearer ", "", 1)

        try:
            payload = decode_access_token(token)
        except JWTError as e:
            clear_current_tenant_id()
            return JSONResponse(status_code=401, content={"detail": str(e)})

        tenant_id = payload.get("tenant_id")
        user_id = payload.get("user_id")

        if not tenant_id:
            return JSONResponse(
                status_code=401,
                content={"detail": "Token invalide: entreprise non identifiée"}
            )

        if not user_id:
            return JSONResponse(
                status_code=401,
                content={"detail": "Token invalide: utilisateur non identifié"}
            )

        request.state.tenant_id = tenant_id
        request.state.user_id = user_id
        set_current_tenant_id(tenant_id)

        try:
            return await call_next(request)
        finally:
            clear_current_tenant_id()
