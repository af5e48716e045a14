# capital_marketplace/tests/test_audit_service.py
from datetime import datetime

from capital_marketplace.services import audit_service
from capital_marketplace.services.audit_service import AuditService, company_resource


def record_events(db_session, company, actions):
    audit = AuditService(db_session)
    for day, action in enumerate(actions, start=1):
        audit.record(
            company.user_id,
            action,
            company_resource(company.id),
            timestamp=datetime(2024, 1, day),
        )
    db_session.commit()
    return audit


class TestAuditService:

    def test_list_for_resource_oldest_first(self, make_company, db_session):
        c = make_company()
        audit = record_events(db_session, c, ["document_uploaded", "kyc_verified"])

        actions = [log.action for log in audit.list_for_resource(company_resource(c.id))]
        assert actions == ["document_uploaded", "kyc_verified"]

    def test_list_filtered_by_action(self, make_company, db_session):
        c = make_company()
        audit = record_events(db_session, c, ["kyc_verified", "financials_unlinked"])

        logs = audit.list_for_resource(company_resource(c.id), actions=["financials_unlinked"])
        assert [log.action for log in logs] == ["financials_unlinked"]

    def test_metadata_round_trip(self, make_company, db_session):
        c = make_company()
        log = AuditService(db_session).record(
            c.user_id, "kyc_verified", company_resource(c.id), metadata={"mockVerify": True}
        )
        db_session.commit()
        db_session.expire_all()

        assert db_session.get(type(log), log.id).metadata_json == {"mockVerify": True}


class TestScoreHistory:

    def test_replays_additive_events(self, make_company, db_session):
        c = make_company()
        audit = record_events(db_session, c, [
            audit_service.KYC_VERIFIED,
            audit_service.DOCUMENT_UPLOADED,
            audit_service.FINANCIALS_UNLINKED,
            audit_service.FINANCIALS_LINKED,
        ])

        history = audit.score_history(c.id)

        assert [(h["event"], h["change"], h["score"]) for h in history] == [
            ("kyc_verified", 30, 30),
            ("document_uploaded", 5, 35),
            ("financials_linked", 20, 55),
        ]
        assert history[0]["date"] == datetime(2024, 1, 1)

    def test_running_total_capped_at_100(self, make_company, db_session):
        c = make_company()
        audit = record_events(
            db_session, c,
            [audit_service.KYC_VERIFIED, audit_service.FINANCIALS_LINKED] + [audit_service.DOCUMENT_UPLOADED] * 12,
        )

        history = audit.score_history(c.id)
        assert history[-1]["score"] == 100
        assert max(h["score"] for h in history) == 100

    def test_other_companies_excluded(self, make_company, db_session):
        c1, c2 = make_company(), make_company()
        record_events(db_session, c1, [audit_service.KYC_VERIFIED])

        assert AuditService(db_session).score_history(c2.id) == []
