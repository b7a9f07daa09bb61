import random
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from textchain.config import settings
from textchain.services.coding_dict import create_dictionary
from textchain.services.markov_chain import MarkovChain, UntrainedChainError
from textchain.utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter()

# In-memory model cache; chains are not thread-safe, one request at a time per model
MODEL_CACHE: dict = {}


class TrainRequest(BaseModel):
    corpus: list[str]
    order: int = Field(default_factory=lambda: settings.MARKOV_ORDER, ge=0)
    model_name: str = "default"
    # dictionary and seed only apply when a new chain is created
    dictionary: Optional[str] = None
    seed: Optional[int] = None
    append: bool = False


class GenerateRequest(BaseModel):
    model_name: str = "default"
    max_length: int = Field(default_factory=lambda: settings.MARKOV_DEFAULT_LENGTH)


def _get_model(name: str) -> MarkovChain:
    model = MODEL_CACHE.get(name)
    if model is None:
        raise HTTPException(status_code=404, detail="model not found, train first")
    return model


def _new_chain(req: TrainRequest) -> MarkovChain:
    try:
        dictionary = create_dictionary(req.dictionary or settings.MARKOV_DICTIONARY)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    seed = req.seed if req.seed is not None else settings.MARKOV_RANDOM_SEED
    return MarkovChain(req.order, dictionary=dictionary, rnd=random.Random(seed))


def _check_append(req: TrainRequest, model: MarkovChain) -> None:
    """Reject append requests whose settings disagree with the cached chain."""
    if model.order != req.order:
        raise HTTPException(
            status_code=400,
            detail=f"model {req.model_name!r} has order {model.order}, cannot append with order {req.order}",
        )
    current = type(model.coding_dictionary).__name__
    if req.dictionary is not None and req.dictionary != current:
        raise HTTPException(
            status_code=400,
            detail=f"model {req.model_name!r} uses {current}, cannot append with {req.dictionary}",
        )
    if req.seed is not None:
        raise HTTPException(
            status_code=400,
            detail="seed only applies to new models; omit it when appending",
        )


@router.post("/train")
async def train(req: TrainRequest):
    if not req.corpus:
        raise HTTPException(status_code=400, detail="corpus is empty")

    model = MODEL_CACHE.get(req.model_name) if req.append else None
    if model is None:
        model = _new_chain(req)
    else:
        _check_append(req, model)

    model.train_many(req.corpus)
    MODEL_CACHE[req.model_name] = model
    logger.info(
        f"[MARKOV] Trained {req.model_name!r}: {len(req.corpus)} lines, {model.count_states()} states"
    )
    return {
        "ok": True,
        "model": req.model_name,
        "order": model.order,
        "states": model.count_states(),
    }


@router.post("/generate")
async def generate(req: GenerateRequest):
    if req.max_length > settings.MARKOV_MAX_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"max_length must not exceed {settings.MARKOV_MAX_LENGTH}",
        )
    model = _get_model(req.model_name)
    try:
        text = model.generate(req.max_length)
    except UntrainedChainError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"ok": True, "data": {"text": text, "length": len(text)}}


@router.get("/models")
async def list_models():
    return {
        "ok": True,
        "data": [
            {"name": name, "order": model.order, "states": model.count_states()}
            for name, model in MODEL_CACHE.items()
        ],
    }


@router.get("/models/{model_name}/stats")
async def model_stats(model_name: str):
    stats = _get_model(model_name).get_stats()
    return {
        "ok": True,
        "data": {
            "order": stats.order,
            "state_count": stats.state_count,
            "vocabulary_size": stats.vocabulary_size,
            "total_observations": stats.total_observations,
            "transition_histogram": stats.transition_histogram,
        },
    }


@router.delete("/models/{model_name}")
async def delete_model(model_name: str):
    _get_model(model_name)
    del MODEL_CACHE[model_name]
    logger.info(f"[MARKOV] Dropped model {model_name!r}")
    return {"ok": True, "model": model_name}
