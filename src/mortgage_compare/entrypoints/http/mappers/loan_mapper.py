from __future__ import annotations

from decimal import Decimal

from mortgage_compare.domain.comparison import (
    ALL_METRICS,
    ComparisonResult,
    HeadToHead,
    LoanStatistics,
    Metric,
)
from mortgage_compare.domain.loan import (
    DEFAULT_CREDIT_SCORE,
    ClosingCosts,
    LoanRecord,
    LoanTerms,
    PaymentBreakdown,
)
from mortgage_compare.engine.amortization import AmortizationYear
from mortgage_compare.entrypoints.http.dtos.loans import (
    AmortizationYearDTO,
    ClosingCostsDTO,
    CompareLoansRequestDTO,
    CompareLoansResponseDTO,
    CompareTwoLoansRequestDTO,
    CompareTwoLoansResponseDTO,
    LoanDetailsDTO,
    LoanEstimateRequestDTO,
    LoanEstimateResponseDTO,
    LoanOfferDTO,
    LoanStatisticsRequestDTO,
    LoanStatisticsResponseDTO,
    MetricBreakdownDTO,
    MetricScoreDTO,
    PairwiseComparisonDTO,
    PaymentBreakdownDTO,
    RankedLoanDTO,
)
from mortgage_compare.entrypoints.http.mappers.decimals import (
    DecimalParser,
    money,
    optional_money,
    rate,
)
from mortgage_compare.use_cases.build_loan_estimate import LoanEstimate, LoanEstimateRequest
from mortgage_compare.use_cases.compare_loan_offers import (
    CompareLoanOffersRequest,
    LoanOffersComparison,
)
from mortgage_compare.use_cases.compare_two_loans import CompareTwoLoansRequest
from mortgage_compare.use_cases.summarize_loans import SummarizeLoansRequest


class LoanMapper:
    """Maps between REST DTOs and domain models for loan estimates and offer comparison."""

    @staticmethod
    def to_loan_terms(
        dto: LoanDetailsDTO,
        parser: DecimalParser,
        prefix: str = "loan_details",
        default_credit_score: int = DEFAULT_CREDIT_SCORE,
    ) -> LoanTerms:
        return LoanTerms(
            loan_amount=parser.parse(f"{prefix}.loan_amount", dto.loan_amount),
            interest_rate=parser.parse(f"{prefix}.interest_rate", dto.interest_rate),
            apr=parser.parse(f"{prefix}.apr", dto.apr),
            term_years=dto.loan_term,
            property_value=parser.parse_optional(f"{prefix}.property_value", dto.property_value),
            credit_score=dto.credit_score if dto.credit_score is not None else default_credit_score,
        )

    @staticmethod
    def to_closing_costs(dto: ClosingCostsDTO, parser: DecimalParser, prefix: str = "closing_costs") -> ClosingCosts:
        return ClosingCosts(
            total=parser.parse(f"{prefix}.total", dto.total),
            loan_costs=parser.parse(f"{prefix}.loan_costs", dto.loan_costs),
            other_costs=parser.parse(f"{prefix}.other_costs", dto.other_costs),
            lender_credits=parser.parse(f"{prefix}.lender_credits", dto.lender_credits),
        )

    @staticmethod
    def to_estimate_request(
        dto: LoanEstimateRequestDTO,
        default_credit_score: int = DEFAULT_CREDIT_SCORE,
    ) -> LoanEstimateRequest:
        """
        Converts request DTO to domain LoanEstimateRequest (str → Decimal).

        Raises:
            ValidationError: If any string value is not a valid decimal
        """
        parser = DecimalParser()

        request = LoanEstimateRequest(
            terms=LoanMapper.to_loan_terms(dto.loan_details, parser, default_credit_score=default_credit_score),
            closing_costs=LoanMapper.to_closing_costs(dto.closing_costs, parser),
            escrow=parser.parse("escrow", dto.escrow),
            principal_interest=parser.parse_optional("principal_interest", dto.principal_interest),
            mortgage_insurance=parser.parse_optional("mortgage_insurance", dto.mortgage_insurance),
            lender_name=dto.lender_name,
            points_paid=parser.parse_optional("points_paid", dto.points_paid),
            include_schedule=dto.include_schedule,
        )

        parser.raise_if_errors()
        return request

    @staticmethod
    def to_loan_details(terms: LoanTerms) -> LoanDetailsDTO:
        return LoanDetailsDTO(
            loan_amount=money(terms.loan_amount),
            interest_rate=rate(terms.interest_rate),
            apr=rate(terms.apr),
            loan_term=terms.term_years,
            property_value=optional_money(terms.property_value),
            credit_score=terms.credit_score,
        )

    @staticmethod
    def to_payment(payment: PaymentBreakdown) -> PaymentBreakdownDTO:
        return PaymentBreakdownDTO(
            principal_interest=money(payment.principal_interest),
            mortgage_insurance=money(payment.mortgage_insurance),
            escrow=money(payment.escrow),
            total=money(payment.total),
        )

    @staticmethod
    def to_closing_costs_dto(costs: ClosingCosts) -> ClosingCostsDTO:
        return ClosingCostsDTO(
            total=money(costs.total),
            loan_costs=money(costs.loan_costs),
            other_costs=money(costs.other_costs),
            lender_credits=money(costs.lender_credits),
        )

    @staticmethod
    def to_schedule(schedule: tuple[AmortizationYear, ...]) -> list[AmortizationYearDTO] | None:
        if not schedule:
            return None
        return [
            AmortizationYearDTO(
                year=row.year,
                principal_paid=money(row.principal_paid),
                interest_paid=money(row.interest_paid),
                ending_balance=money(row.ending_balance),
            )
            for row in schedule
        ]

    @staticmethod
    def to_estimate_response(estimate: LoanEstimate) -> LoanEstimateResponseDTO:
        record = estimate.record
        return LoanEstimateResponseDTO(
            loan_details=LoanMapper.to_loan_details(record.terms),
            monthly_payment=LoanMapper.to_payment(record.payment),
            closing_costs=LoanMapper.to_closing_costs_dto(record.closing_costs),
            lender_name=record.lender_name,
            ltv=optional_money(estimate.ltv),
            total_interest=money(estimate.total_interest),
            implied_apr=rate(estimate.implied_apr),
            five_year_total=money(record.five_year_total),
            schedule=LoanMapper.to_schedule(estimate.schedule),
        )

    @staticmethod
    def to_offer_record(
        offer: LoanOfferDTO,
        parser: DecimalParser,
        prefix: str,
        default_credit_score: int = DEFAULT_CREDIT_SCORE,
    ) -> LoanRecord:
        return LoanRecord(
            terms=LoanMapper.to_loan_terms(
                offer.loan_details,
                parser,
                prefix=f"{prefix}.loan_details",
                default_credit_score=default_credit_score,
            ),
            payment=PaymentBreakdown(
                principal_interest=parser.parse(f"{prefix}.principal_interest", offer.principal_interest),
                mortgage_insurance=parser.parse(f"{prefix}.mortgage_insurance", offer.mortgage_insurance),
                escrow=parser.parse(f"{prefix}.escrow", offer.escrow),
            ),
            closing_costs=LoanMapper.to_closing_costs(offer.closing_costs, parser, prefix=f"{prefix}.closing_costs"),
            lender_name=offer.lender_name,
        )

    @staticmethod
    def to_offer_records(
        offers: list[LoanOfferDTO],
        default_credit_score: int = DEFAULT_CREDIT_SCORE,
    ) -> tuple[LoanRecord, ...]:
        """
        Converts each offer to a LoanRecord (str → Decimal); fields are
        reported as loans.<position>.<field>.

        Raises:
            ValidationError: If any string value is not a valid decimal
        """
        parser = DecimalParser()
        loans = tuple(
            LoanMapper.to_offer_record(offer, parser, f"loans.{i}", default_credit_score)
            for i, offer in enumerate(offers)
        )
        parser.raise_if_errors()
        return loans

    @staticmethod
    def to_compare_request(
        dto: CompareLoansRequestDTO,
        default_credit_score: int = DEFAULT_CREDIT_SCORE,
    ) -> CompareLoanOffersRequest:
        return CompareLoanOffersRequest(
            loans=LoanMapper.to_offer_records(dto.loans, default_credit_score),
            metrics=tuple(dto.metrics) if dto.metrics else ALL_METRICS,
        )

    @staticmethod
    def to_ranked_loan(loan: LoanRecord, index: int) -> RankedLoanDTO:
        return RankedLoanDTO(
            index=index,
            lender_name=loan.lender_name,
            apr=rate(loan.terms.apr),
            monthly_payment=money(loan.payment.total),
            closing_costs=money(loan.closing_costs.total),
            five_year_total=money(loan.five_year_total),
        )

    @staticmethod
    def to_pairwise(first_index: int, second_index: int, result: ComparisonResult) -> PairwiseComparisonDTO:
        return PairwiseComparisonDTO(
            loan1_index=first_index,
            loan2_index=second_index,
            monthly_payment_diff=money(result.monthly_payment_diff),
            apr_diff=rate(result.apr_diff),
            closing_costs_diff=money(result.closing_costs_diff),
            five_year_diff=money(result.five_year_diff),
            better_option=result.better_option,
        )

    @staticmethod
    def to_compare_response(
        request: CompareLoanOffersRequest, result: LoanOffersComparison
    ) -> CompareLoansResponseDTO:
        # Offers are reported by their position in the request
        index_of = {id(loan): i for i, loan in enumerate(request.loans)}

        return CompareLoansResponseDTO(
            ranking=[LoanMapper.to_ranked_loan(loan, index_of[id(loan)]) for loan in result.ranking.ranked],
            best_loan=LoanMapper.to_ranked_loan(result.best_loan, index_of[id(result.best_loan)]),
            comparisons=[
                LoanMapper.to_pairwise(pair.first_index, pair.second_index, pair.result)
                for pair in result.comparisons
            ],
            scores=[
                MetricScoreDTO(
                    index=index_of[id(score.loan)],
                    score=score.score,
                    metrics_won=list(score.metrics_won),
                )
                for score in result.scores
            ],
        )

    @staticmethod
    def to_compare_two_request(
        dto: CompareTwoLoansRequestDTO,
        default_credit_score: int = DEFAULT_CREDIT_SCORE,
    ) -> CompareTwoLoansRequest:
        """
        Raises:
            ValidationError: If any string value is not a valid decimal
        """
        parser = DecimalParser()

        request = CompareTwoLoansRequest(
            loan1=LoanMapper.to_offer_record(dto.loan1, parser, "loan1", default_credit_score),
            loan2=LoanMapper.to_offer_record(dto.loan2, parser, "loan2", default_credit_score),
        )

        parser.raise_if_errors()
        return request

    @staticmethod
    def to_compare_two_response(result: HeadToHead) -> CompareTwoLoansResponseDTO:
        def formatted(metric: Metric, value: Decimal) -> str:
            return rate(value) if metric is Metric.APR else money(value)

        return CompareTwoLoansResponseDTO(
            comparison=LoanMapper.to_pairwise(0, 1, result.comparison),
            breakdown=[
                MetricBreakdownDTO(
                    metric=row.metric,
                    loan1=formatted(row.metric, row.loan1_value),
                    loan2=formatted(row.metric, row.loan2_value),
                    difference=formatted(row.metric, row.difference),
                    winner=row.winner,
                )
                for row in result.breakdown
            ],
            overall_winner=result.overall_winner,
        )

    @staticmethod
    def to_statistics_request(
        dto: LoanStatisticsRequestDTO,
        default_credit_score: int = DEFAULT_CREDIT_SCORE,
    ) -> SummarizeLoansRequest:
        return SummarizeLoansRequest(loans=LoanMapper.to_offer_records(dto.loans, default_credit_score))

    @staticmethod
    def to_statistics_response(
        request: SummarizeLoansRequest, stats: LoanStatistics
    ) -> LoanStatisticsResponseDTO:
        best_index = next(i for i, loan in enumerate(request.loans) if loan is stats.best_loan)

        return LoanStatisticsResponseDTO(
            total_loans=stats.total_loans,
            average_apr=rate(stats.average_apr),
            lowest_apr=rate(stats.lowest_apr),
            highest_apr=rate(stats.highest_apr),
            average_monthly_payment=money(stats.average_monthly_payment),
            total_loan_amount=money(stats.total_loan_amount),
            best_loan=LoanMapper.to_ranked_loan(stats.best_loan, best_index),
        )
