from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import FastAPI, HTTPException

from src.cmd.schemas.autocorrect import CorrectionRequestPayload, CorrectionResponsePayload
from src.config.logging import setup_logging
from src.lib.corrector import CorrectionPipeline, RemoteChecker
from src.lib.settings import JsonSettingsStore, Settings, SettingsManager

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, *, client: RemoteChecker | None = None) -> FastAPI:
    """FastAPIアプリケーションを構築して返す。"""

    setup_logging()
    base_settings = settings if settings is not None else SettingsManager.load(JsonSettingsStore()).settings
    app = FastAPI(title="autocorrect")

    @app.get("/healthz")
    async def health_check() -> dict[str, str]:
        """死活監視用エンドポイント。"""

        return {"status": "ok"}

    @app.get("/settings")
    async def settings_endpoint() -> dict[str, Any]:
        return base_settings.model_dump()

    @app.post("/correct", response_model=CorrectionResponsePayload)
    async def correct_endpoint(payload: CorrectionRequestPayload) -> CorrectionResponsePayload:
        """quick fix とリモート校正を順に適用した結果を返す。"""

        effective = payload.resolve_settings(base_settings)
        pipeline = CorrectionPipeline(settings=effective, client=client)
        logger.debug(
            "correct_request: length=%d language=%s remote=%s",
            len(payload.text),
            effective.language,
            effective.use_remote_correction,
        )
        try:
            result = await asyncio.to_thread(pipeline.run, payload.text)
        except Exception as exc:  # noqa: BLE001 - 予期せぬ障害は500で返す
            logger.exception("補正に失敗しました")
            raise HTTPException(status_code=500, detail="補正に失敗しました") from exc

        return CorrectionResponsePayload.from_result(result)

    return app


app = create_app()
