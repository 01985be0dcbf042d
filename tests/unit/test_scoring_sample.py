from agrimrv.domain.scoring import aggregate


def test_score_boundaries():
    def score_to_amount(cp, mr):
        return aggregate(cp, mr).eligible_loan_amount
    assert score_to_amount(0, 0) == 0
    assert score_to_amount(59, 59) == 0
    assert score_to_amount(60, 60) == 250
    assert score_to_amount(90, 90) == 1000
