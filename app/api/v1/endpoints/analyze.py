import hashlib

from fastapi import APIRouter

from app.core.exceptions import CiphertextTooLongError
from app.dependencies import AttackDep, DbSessionDep, SettingsDep
from app.models.database import Analysis
from app.models.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ColumnBreakData,
    ErrorResponse,
    KasiskiData,
    KeyLengthScoreData,
    RepetitionData,
)
from app.services.analysis.statistics import StatisticalAnalyzer
from app.services.explanation.generator import ExplanationGenerator
from app.services.pipeline.orchestrator import AttackResult

router = APIRouter()

TOP_DISTANCES = 10


@router.post(
    "",
    response_model=AnalyzeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        422: {"model": ErrorResponse, "description": "Analysis failed"},
    },
    summary="Break a Vigenère ciphertext",
    description=(
        "Recover the key length and key of a Vigenère ciphertext using Kasiski "
        "examination, Index of Coincidence scoring and per-column chi-squared "
        "frequency matching."
    ),
)
async def analyze_ciphertext(
    request: AnalyzeRequest,
    settings: SettingsDep,
    attack: AttackDep,
    db: DbSessionDep,
) -> AnalyzeResponse:
    """
    Run the ciphertext-only attack and record it in the history.

    The analysis pipeline:
    1. Normalize the ciphertext (letters only, uppercase)
    2. Kasiski examination of repeated trigrams and tetragrams
    3. Index of Coincidence for every candidate key length
    4. Per-column Caesar breaking for the chosen key length
    5. Decryption and human-readable explanations
    """
    if len(request.ciphertext) > settings.max_ciphertext_length:
        raise CiphertextTooLongError(len(request.ciphertext), settings.max_ciphertext_length)

    result = attack.run(
        request.ciphertext,
        key_length=request.key_length,
        max_key_length=request.max_key_length,
    )
    explanations = ExplanationGenerator().generate(result)

    response = _to_response(result, explanations)

    analysis = Analysis(
        ciphertext_hash=hashlib.sha256(request.ciphertext.encode()).hexdigest(),
        ciphertext=request.ciphertext,
        best_key_length=result.best_key_length,
        key_length=result.key_length,
        key_length_scores=[s.model_dump() for s in response.key_length_scores],
        kasiski=response.kasiski.model_dump(mode="json"),
        recovered_key=result.key,
        reduced_key=result.reduced_key,
        plaintext=result.plaintext,
        explanations=explanations,
    )
    db.add(analysis)
    await db.commit()

    response.id = analysis.id
    return response


def _to_response(result: AttackResult, explanations: list[str]) -> AnalyzeResponse:
    """Convert the attack result into the API schema."""
    kasiski = result.kasiski

    return AnalyzeResponse(
        statistics=StatisticalAnalyzer().analyze(result.normalized.text),
        kasiski=KasiskiData(
            repetitions={
                n: [RepetitionData.model_validate(rep) for rep in reps]
                for n, reps in kasiski.repetitions.items()
            },
            distance_count=len(kasiski.distances),
            gcd=kasiski.gcd,
            gcd_by_length=kasiski.gcd_by_length,
            common_distances=list(kasiski.distance_frequencies[:TOP_DISTANCES]),
            common_factors=list(kasiski.factor_frequencies[:TOP_DISTANCES]),
        ),
        key_length_scores=[
            KeyLengthScoreData.model_validate(score) for score in result.key_length_scores
        ],
        best_key_length=result.best_key_length,
        key_length=result.key_length,
        key=result.key,
        reduced_key=result.reduced_key,
        plaintext=result.plaintext,
        columns=[
            ColumnBreakData(
                column_index=column.column_index,
                length=len(column.column),
                shift=column.best.shift,
                letter=column.best.letter,
                chi_squared=column.best.chi_squared,
            )
            for column in result.recovered.columns
        ],
        explanations=explanations,
    )
