from __future__ import annotations

from typing import Dict

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from .engine import ImpactEngine
from .errors import EntityNotFound, InvalidInput
from .models.metrics import MetricSnapshot
from .numeric import format_compact_currency, round_score
from .repositories.in_memory import InMemoryEntityRepository
from .schemas import (
    EntityCreateRequest,
    EntityCreateResponse,
    EntityListResponse,
    EntitySummary,
    ErrorResponse,
    HoldingsRequest,
    HoldingsResponse,
    ProjectionRequest,
    ProjectionResponse,
    RollupRequest,
    RollupResponse,
    ScoreResponse,
)

logger = structlog.get_logger()

app = FastAPI(title="Impact Score Engine", version="0.1.0")

repository = InMemoryEntityRepository()
engine = ImpactEngine(repository, repository, repository)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(_, exc: InvalidInput) -> JSONResponse:
    logger.info("invalid_input", field=exc.field, value=repr(exc.value))
    body = ErrorResponse(error="invalid_input", message=str(exc), detail={"field": exc.field})
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(EntityNotFound)
async def entity_not_found_handler(_, exc: EntityNotFound) -> JSONResponse:
    body = ErrorResponse(error="entity_not_found", message=str(exc), detail={"entity_id": exc.entity_id})
    return JSONResponse(status_code=404, content=body.model_dump())


@app.post("/entities", response_model=EntityCreateResponse)
def create_entity(payload: EntityCreateRequest) -> EntityCreateResponse:
    for snapshot in payload.snapshots:
        if snapshot.entity_id != payload.entity_id:
            raise HTTPException(status_code=400, detail=f"Snapshot belongs to {snapshot.entity_id}")
    repository.save(payload.entity_id, payload.funding.to_state(), payload.deal_terms, payload.snapshots)
    return EntityCreateResponse(entity_id=payload.entity_id)


@app.post("/entities/{entity_id}/snapshots", response_model=EntityCreateResponse)
def add_snapshot(entity_id: str, snapshot: MetricSnapshot) -> EntityCreateResponse:
    if snapshot.entity_id != entity_id:
        raise HTTPException(status_code=400, detail=f"Snapshot belongs to {snapshot.entity_id}")
    repository.add_snapshot(snapshot)
    return EntityCreateResponse(entity_id=entity_id)


@app.get("/entities", response_model=EntityListResponse)
def list_entities() -> EntityListResponse:
    summaries = []
    for entity_id in repository.list_ids():
        score = engine.derive_score(entity_id)
        funding = engine.funding.get_funding_state(entity_id)
        summaries.append(
            EntitySummary(
                entity_id=entity_id,
                consolidated=round_score(score.consolidated),
                band=score.band(),
                amount_raised=format_compact_currency(funding.amount_raised),
            )
        )
    return EntityListResponse(entities=summaries)


@app.get("/entities/{entity_id}/score", response_model=ScoreResponse)
def get_score(entity_id: str) -> ScoreResponse:
    score = engine.derive_score(entity_id)
    return ScoreResponse(entity_id=entity_id, score=score, band=score.band())


@app.post("/entities/{entity_id}/projection", response_model=ProjectionResponse)
def project_return(entity_id: str, payload: ProjectionRequest) -> ProjectionResponse:
    projection = engine.project_return(entity_id, payload.investment_amount)
    terms = engine.deal_terms.get_deal_terms(entity_id)
    funding = engine.funding.get_funding_state(entity_id)
    return ProjectionResponse(
        entity_id=entity_id,
        projection=projection,
        within_bounds=engine.projector.within_bounds(payload.investment_amount, terms),
        funding_progress=terms.progress(funding.amount_raised),
    )


@app.post("/portfolio/rollup", response_model=RollupResponse)
def rollup(payload: RollupRequest) -> RollupResponse:
    return RollupResponse(result=engine.aggregate_portfolio(payload.entity_ids))


@app.post("/portfolio/holdings", response_model=HoldingsResponse)
def holdings(payload: HoldingsRequest) -> HoldingsResponse:
    return HoldingsResponse(result=engine.summarize_holdings(payload.holdings))


@app.get("/health")
def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}
