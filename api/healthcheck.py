from fastapi import APIRouter
from utils.constants import CLINICAL_MAX_RETRIES, NURSING_MAX_RETRIES

router = APIRouter(prefix="/health", tags=["Health Check"])


@router.get("/check", summary="Health Check")
def healthcheck():
    return {
        "status": "ok",
        "service": "duty-roster-engine",
        "profiles": {
            "clinical": {"defaultRetries": CLINICAL_MAX_RETRIES},
            "nursing": {"defaultRetries": NURSING_MAX_RETRIES},
        },
    }
