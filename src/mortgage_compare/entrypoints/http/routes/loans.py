from fastapi import APIRouter, Depends

from mortgage_compare.entrypoints.http.dependencies import (
    get_analyze_fees_use_case,
    get_build_loan_estimate_use_case,
    get_calculate_scenarios_use_case,
    get_compare_loan_offers_use_case,
    get_compare_two_loans_use_case,
    get_evaluate_refinance_use_case,
    get_summarize_loans_use_case,
)
from mortgage_compare.entrypoints.http.dtos.fees import FeeAnalysisRequestDTO, FeeAnalysisResponseDTO
from mortgage_compare.entrypoints.http.dtos.loans import (
    CompareLoansRequestDTO,
    CompareLoansResponseDTO,
    CompareTwoLoansRequestDTO,
    CompareTwoLoansResponseDTO,
    LoanEstimateRequestDTO,
    LoanEstimateResponseDTO,
    LoanStatisticsRequestDTO,
    LoanStatisticsResponseDTO,
)
from mortgage_compare.entrypoints.http.dtos.refinance import (
    RefinanceRequestDTO,
    RefinanceResponseDTO,
)
from mortgage_compare.entrypoints.http.dtos.scenarios import (
    ScenarioRequestDTO,
    ScenarioResponseDTO,
)
from mortgage_compare.entrypoints.http.error_responses import ErrorResponse
from mortgage_compare.entrypoints.http.mappers.fee_mapper import FeeMapper
from mortgage_compare.entrypoints.http.mappers.loan_mapper import LoanMapper
from mortgage_compare.entrypoints.http.mappers.refinance_mapper import RefinanceMapper
from mortgage_compare.entrypoints.http.mappers.scenario_mapper import ScenarioMapper
from mortgage_compare.infra.config import Settings, get_settings
from mortgage_compare.use_cases.analyze_fees import AnalyzeFees
from mortgage_compare.use_cases.build_loan_estimate import BuildLoanEstimate
from mortgage_compare.use_cases.calculate_scenarios import CalculateScenarios
from mortgage_compare.use_cases.compare_loan_offers import CompareLoanOffers
from mortgage_compare.use_cases.compare_two_loans import CompareTwoLoans
from mortgage_compare.use_cases.evaluate_refinance import EvaluateRefinance
from mortgage_compare.use_cases.summarize_loans import SummarizeLoans


router = APIRouter(prefix="/loans", tags=["Loans"])

VALIDATION_RESPONSES = {
    422: {
        "description": "Validation error",
        "model": ErrorResponse,
        "content": {
            "application/json": {
                "examples": {
                    "invalid_decimal": {
                        "summary": "Invalid decimal format",
                        "value": {
                            "detail": "Validation failed",
                            "code": "VALIDATION_ERROR",
                            "errors": [
                                {
                                    "field": "loan_details.interest_rate",
                                    "message": "Must be a valid decimal: abc",
                                    "code": "INVALID_DECIMAL",
                                }
                            ],
                        },
                    },
                    "invalid_term": {
                        "summary": "Invalid term",
                        "value": {
                            "detail": "term_years must be one of [10, 15, 20, 25, 30]",
                            "code": "VALIDATION_ERROR",
                            "errors": [
                                {
                                    "field": "term_years",
                                    "message": "term_years must be one of [10, 15, 20, 25, 30]",
                                    "code": "INVALID_VALUE",
                                }
                            ],
                        },
                    },
                }
            }
        },
    },
}


@router.post(
    "/estimate",
    response_model=LoanEstimateResponseDTO,
    summary="Build a loan estimate",
    description="""
    Complete a loan estimate from its terms.

    ## Monetary Values
    - Amounts are decimal strings with up to 2 places (e.g., "280000.00")
    - Rates are percent strings with up to 3 places (e.g., "6.875")

    ## Derived Fields
    - P&I from the amortization formula (unless stated)
    - LTV when a property value is given
    - PMI above 80% LTV, tiered by credit score (unless stated)
    - Total payment = P&I + PMI + escrow
    - Five-year total = 60 × total payment + closing costs
    """,
    responses=VALIDATION_RESPONSES,
)
def build_loan_estimate(
    payload: LoanEstimateRequestDTO,
    use_case: BuildLoanEstimate = Depends(get_build_loan_estimate_use_case),
    settings: Settings = Depends(get_settings),
) -> LoanEstimateResponseDTO:
    """Build loan estimate endpoint following parse → execute → map → return."""
    request = LoanMapper.to_estimate_request(payload, default_credit_score=settings.default_credit_score)
    estimate = use_case.execute(request)
    return LoanMapper.to_estimate_response(estimate)


@router.post(
    "/compare",
    response_model=CompareLoansResponseDTO,
    summary="Compare loan offers",
    description="""
    Compare two or more loan offers.

    - Ranking by five-year total cost, cheapest first (ties keep request order)
    - Pairwise comparison for every pair; deltas are loan2 - loan1
    - Scores: one point per metric (apr, monthly_payment, closing_costs,
      five_year_total) where an offer has the lowest value; ties all score
    """,
    responses=VALIDATION_RESPONSES,
)
def compare_loans(
    payload: CompareLoansRequestDTO,
    use_case: CompareLoanOffers = Depends(get_compare_loan_offers_use_case),
    settings: Settings = Depends(get_settings),
) -> CompareLoansResponseDTO:
    request = LoanMapper.to_compare_request(payload, default_credit_score=settings.default_credit_score)
    result = use_case.execute(request)
    return LoanMapper.to_compare_response(request, result)


@router.post(
    "/compare-two",
    response_model=CompareTwoLoansResponseDTO,
    summary="Compare two loan offers metric by metric",
    description="""
    Break a two-offer comparison down by metric.

    - Each metric (apr, monthly_payment, closing_costs, five_year_total) reports
      both values, the difference (loan2 - loan1) and the winner
    - The lower value wins; equal values go to loan1
    - The overall winner has the lower five-year total
    """,
    responses=VALIDATION_RESPONSES,
)
def compare_two_loans(
    payload: CompareTwoLoansRequestDTO,
    use_case: CompareTwoLoans = Depends(get_compare_two_loans_use_case),
    settings: Settings = Depends(get_settings),
) -> CompareTwoLoansResponseDTO:
    request = LoanMapper.to_compare_two_request(payload, default_credit_score=settings.default_credit_score)
    result = use_case.execute(request)
    return LoanMapper.to_compare_two_response(result)


@router.post(
    "/statistics",
    response_model=LoanStatisticsResponseDTO,
    summary="Summarize loan offers",
    description="""
    Aggregate figures across one or more offers: average, lowest and highest
    APR, average monthly payment and total loan amount. The best loan is the
    one with the lowest APR (the first such offer on ties).
    """,
    responses=VALIDATION_RESPONSES,
)
def summarize_loans(
    payload: LoanStatisticsRequestDTO,
    use_case: SummarizeLoans = Depends(get_summarize_loans_use_case),
    settings: Settings = Depends(get_settings),
) -> LoanStatisticsResponseDTO:
    request = LoanMapper.to_statistics_request(payload, default_credit_score=settings.default_credit_score)
    stats = use_case.execute(request)
    return LoanMapper.to_statistics_response(request, stats)


@router.post(
    "/scenarios",
    response_model=ScenarioResponseDTO,
    summary="Price down payment and term scenarios",
    description="""
    Price every combination of down payment and loan term for a property.

    Scenarios are sorted by five-year cost; equal costs keep generation order
    (down payment outer, term inner).
    """,
    responses=VALIDATION_RESPONSES,
)
def calculate_scenarios(
    payload: ScenarioRequestDTO,
    use_case: CalculateScenarios = Depends(get_calculate_scenarios_use_case),
    settings: Settings = Depends(get_settings),
) -> ScenarioResponseDTO:
    request = ScenarioMapper.to_domain_request(payload, default_credit_score=settings.default_credit_score)
    result = use_case.execute(request)
    return ScenarioMapper.to_response(request, result)


@router.post(
    "/refinance",
    response_model=RefinanceResponseDTO,
    summary="Evaluate a refinance",
    description="""
    Evaluate refinancing at a new rate.

    ## Recommendation
    - NOT_RECOMMENDED: the new payment is not lower (break_even_months is null)
    - RECOMMENDED: closing costs recovered within the configured threshold
      (MORTGAGE_COMPARE_REFINANCE_RECOMMENDED_MAX_MONTHS, default 36), inclusive
    - CONSIDER: savings exist but take longer than the threshold to recover costs
    """,
    responses=VALIDATION_RESPONSES,
)
def evaluate_refinance(
    payload: RefinanceRequestDTO,
    use_case: EvaluateRefinance = Depends(get_evaluate_refinance_use_case),
) -> RefinanceResponseDTO:
    request = RefinanceMapper.to_domain_request(payload)
    evaluation = use_case.execute(request)
    return RefinanceMapper.to_response(evaluation)


@router.post(
    "/fee-analysis",
    response_model=FeeAnalysisResponseDTO,
    summary="Analyze the fees implied by an APR",
    description="""
    Read how much of a quoted APR comes from fees rather than interest.

    ## Interpretation (APR - interest rate)
    - Excellent - Very low fees: under 0.125
    - Good - Reasonable fees: under 0.25
    - Fair - Moderate fees: under 0.5
    - High - Significant fees included: 0.5 and above

    The payment at the APR approximates the cost including fees; the monthly
    difference is what the fees add per month.
    """,
    responses=VALIDATION_RESPONSES,
)
def analyze_fees(
    payload: FeeAnalysisRequestDTO,
    use_case: AnalyzeFees = Depends(get_analyze_fees_use_case),
) -> FeeAnalysisResponseDTO:
    request = FeeMapper.to_domain_request(payload)
    analysis = use_case.execute(request)
    return FeeMapper.to_response(analysis)
