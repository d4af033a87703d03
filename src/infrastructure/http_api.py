import logging
from aiohttp import web
from pydantic import ValidationError

from src.application.recommendation_service import RecommendationService
from src.domain.exceptions import error_type_to_status_code, is_app_error, not_found_error, wrong_schema_error
from src.domain.models import RecommendationCreate
from src.domain.repository import MAX_STORED_INT
from src.infrastructure.acl import RecommendationTranslator

logger = logging.getLogger(__name__)

SERVICE_KEY = web.AppKey("recommendation_service", RecommendationService)

routes = web.RouteTableDef()


@web.middleware
async def error_middleware(request: web.Request, handler):
    """Translates application errors into their status codes; anything else becomes a 500."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except Exception as e:
        if is_app_error(e):
            status = error_type_to_status_code(e.type) or 500
            return web.json_response({'type': e.type, 'message': e.message}, status=status)

        logger.exception(f"Unhandled error on {request.method} {request.path}: {e}")
        return web.json_response({'message': 'Internal server error'}, status=500)


def _service(request: web.Request) -> RecommendationService:
    return request.app[SERVICE_KEY]

def _path_int(request: web.Request, key: str) -> int:
    try:
        value = int(request.match_info[key])
    except ValueError:
        raise wrong_schema_error(f"{key} must be an integer")
    if value < 0:
        raise wrong_schema_error(f"{key} must not be negative")
    return value

def _path_id(request: web.Request) -> int:
    recommendation_id = _path_int(request, 'id')
    if recommendation_id > MAX_STORED_INT:
        raise not_found_error()
    return recommendation_id

def _path_amount(request: web.Request) -> int:
    amount = _path_int(request, 'amount')
    if amount > MAX_STORED_INT:
        raise wrong_schema_error(f"amount must not exceed {MAX_STORED_INT}")
    return amount


@routes.post('/recommendations')
async def insert_recommendation(request: web.Request) -> web.Response:
    try:
        body = await request.json()
        data = RecommendationCreate.model_validate(body)
    except (ValueError, ValidationError) as e:
        # ValueError covers both JSONDecodeError and UnicodeDecodeError
        logger.warning(f"Invalid recommendation payload: {e}")
        raise wrong_schema_error(str(e))

    await _service(request).insert(data)
    return web.Response(status=201)

@routes.get('/recommendations')
async def list_recommendations(request: web.Request) -> web.Response:
    recommendations = await _service(request).get()
    return web.json_response([RecommendationTranslator.to_wire(r) for r in recommendations])

@routes.get('/recommendations/random')
async def random_recommendation(request: web.Request) -> web.Response:
    recommendation = await _service(request).get_random()
    return web.json_response(RecommendationTranslator.to_wire(recommendation))

@routes.get('/recommendations/top/{amount}')
async def top_recommendations(request: web.Request) -> web.Response:
    amount = _path_amount(request)
    recommendations = await _service(request).get_top(amount)
    return web.json_response([RecommendationTranslator.to_wire(r) for r in recommendations])

@routes.get(r'/recommendations/{id:\d+}')
async def get_recommendation(request: web.Request) -> web.Response:
    recommendation = await _service(request).get_by_id(_path_id(request))
    return web.json_response(RecommendationTranslator.to_wire(recommendation))

@routes.post(r'/recommendations/{id:\d+}/upvote')
async def upvote_recommendation(request: web.Request) -> web.Response:
    await _service(request).upvote(_path_id(request))
    return web.Response(status=200)

@routes.post(r'/recommendations/{id:\d+}/downvote')
async def downvote_recommendation(request: web.Request) -> web.Response:
    await _service(request).downvote(_path_id(request))
    return web.Response(status=200)

@routes.get('/health')
async def health(request: web.Request) -> web.Response:
    return web.json_response({'status': 'healthy'})


def create_app(service: RecommendationService) -> web.Application:
    """Builds the aiohttp application serving the recommendation routes."""
    app = web.Application(middlewares=[error_middleware])
    app[SERVICE_KEY] = service
    app.add_routes(routes)
    return app
