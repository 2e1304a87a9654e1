from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from akkuea_api.auth.dependencies import get_settings
from akkuea_api.core.config import Settings

router = APIRouter(tags=['health'])


@router.get('/ping')
def ping():
    return {'message': 'pong'}


@router.get('/health')
def health(settings: Settings = Depends(get_settings)):
    return {
        'status': 'ok',
        'service': settings.app_name,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }
