# capital_marketplace/scripts/seed.py
"""
Seed the database with sample data for development and testing

Usage:
    python -m capital_marketplace.scripts.seed

Existing rows are deleted first.
"""
import sys
from datetime import datetime
from typing import Dict

from dotenv import load_dotenv

from capital_marketplace.config import get_settings
from capital_marketplace.core.database import Database
from capital_marketplace.core.logger import get_logger
from capital_marketplace.models import AuditLog, Company, Document, Notification, User
from capital_marketplace.services import audit_service
from capital_marketplace.services.audit_service import company_resource
from capital_marketplace.services.investability_service import InvestabilityService
from capital_marketplace.services.store import CompanyStore

load_dotenv()

logger = get_logger(__name__)

SAMPLE_COMPANIES = [
    {
        "email": "founder@techstartup.com",
        "name": "TechVenture AI",
        "sector": "Technology",
        "target_raise": 2_000_000,
        "revenue": 500_000,
        "kyc_verified": True,
        "financials_linked": True,
        "created_at": datetime(2024, 1, 15, 10, 30),
    },
    {
        "email": "ceo@healthtech.com",
        "name": "HealthTech Solutions",
        "sector": "Healthcare",
        "target_raise": 5_000_000,
        "revenue": 1_200_000,
        "kyc_verified": True,
        "financials_linked": False,
        "created_at": datetime(2024, 2, 1, 8, 0),
    },
    {
        "email": "founder@fintech.com",
        "name": "FinanceFlow",
        "sector": "Finance",
        "target_raise": 1_500_000,
        "revenue": 250_000,
        "kyc_verified": False,
        "financials_linked": False,
        "created_at": datetime(2024, 2, 15, 12, 0),
    },
]

SAMPLE_DOCUMENTS = {
    "TechVenture AI": [
        ("TechVenture_PitchDeck_2024.pdf", "application/pdf", 2_048_576, "pitch-deck", datetime(2024, 1, 16)),
        (
            "Financial_Statements_Q4_2023.xlsx",
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            512_000,
            "financial-statements",
            datetime(2024, 1, 18),
        ),
        (
            "Business_Plan_2024.docx",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            1_024_000,
            "business-plan",
            datetime(2024, 1, 20),
        ),
    ],
    "HealthTech Solutions": [
        ("HealthTech_Executive_Summary.pdf", "application/pdf", 1_536_000, "pitch-deck", datetime(2024, 2, 2)),
        ("Clinical_Trial_Results.pdf", "application/pdf", 3_072_000, "other", datetime(2024, 2, 5)),
    ],
}


def clear_data(db) -> None:
    for model in (AuditLog, Notification, Document, Company, User):
        db.query(model).delete()
    db.flush()


def seed(database: Database) -> Dict[str, int]:
    """
    Insert sample users, companies, documents, notifications and audit logs.

    Returns:
        Row counts per table
    """
    logger.info("🌱 Starting database seeding...")
    database.create_all()

    with database.session() as db:
        logger.info("🧹 Cleaning existing data...")
        clear_data(db)

        companies = {}
        for sample in SAMPLE_COMPANIES:
            user = User(email=sample["email"], created_at=sample["created_at"])
            db.add(user)
            db.flush()

            company = Company(
                user_id=user.id,
                name=sample["name"],
                sector=sample["sector"],
                target_raise=sample["target_raise"],
                revenue=sample["revenue"],
                kyc_verified=sample["kyc_verified"],
                financials_linked=sample["financials_linked"],
                created_at=sample["created_at"],
            )
            db.add(company)
            db.flush()
            companies[company.name] = company

        logger.info("📄 Creating sample documents...")
        document_count = 0
        for company_name, documents in SAMPLE_DOCUMENTS.items():
            company = companies[company_name]
            for name, mime_type, size, category, created_at in documents:
                db.add(Document(
                    company_id=company.id,
                    name=name,
                    mime_type=mime_type,
                    size=size,
                    path=f"uploads/{company.id}/{name}",
                    category=category,
                    created_at=created_at,
                ))
                document_count += 1

        logger.info("🔔 Creating sample notifications...")
        tech = companies["TechVenture AI"]
        health = companies["HealthTech Solutions"]
        fintech = companies["FinanceFlow"]
        notifications = [
            Notification(
                user_id=tech.user_id,
                type="success",
                title="Onboarding Complete",
                message='Welcome to Capital Marketplace! Your company "TechVenture AI" has been successfully onboarded.',
                data={"event": "onboarding_complete", "companyName": "TechVenture AI"},
                created_at=datetime(2024, 1, 15, 10, 30),
                read_at=datetime(2024, 1, 15, 11, 0),
            ),
            Notification(
                user_id=tech.user_id,
                type="success",
                title="KYC Verified",
                message="Your KYC verification has been completed successfully. You earned 30 investability points!",
                data={"event": "kyc_verified", "pointsEarned": 30},
                created_at=datetime(2024, 1, 16, 9, 15),
                read_at=datetime(2024, 1, 16, 9, 45),
            ),
            Notification(
                user_id=tech.user_id,
                type="success",
                title="Financials Linked",
                message="Your bank account has been successfully linked. You earned 20 investability points!",
                data={"event": "financials_linked", "pointsEarned": 20},
                created_at=datetime(2024, 1, 17, 14, 20),
            ),
            Notification(
                user_id=tech.user_id,
                type="info",
                title="Document Uploaded",
                message='Document "TechVenture_PitchDeck_2024.pdf" has been uploaded successfully to your data room.',
                data={"event": "document_uploaded", "documentName": "TechVenture_PitchDeck_2024.pdf"},
                created_at=datetime(2024, 1, 16, 16, 45),
            ),
            Notification(
                user_id=health.user_id,
                type="success",
                title="Onboarding Complete",
                message='Welcome to Capital Marketplace! Your company "HealthTech Solutions" has been successfully onboarded.',
                data={"event": "onboarding_complete", "companyName": "HealthTech Solutions"},
                created_at=datetime(2024, 2, 1, 8, 0),
                read_at=datetime(2024, 2, 1, 8, 30),
            ),
            Notification(
                user_id=fintech.user_id,
                type="info",
                title="Welcome to Capital Marketplace",
                message="Get started by completing your KYC verification and linking your financial accounts.",
                data={"event": "welcome", "tips": ["Complete KYC", "Link bank account", "Upload documents"]},
                created_at=datetime(2024, 2, 15, 12, 0),
            ),
        ]
        db.add_all(notifications)

        logger.info("📊 Creating sample audit logs...")
        resource = company_resource(tech.id)
        audit_logs = [
            AuditLog(
                user_id=tech.user_id,
                action=audit_service.KYC_VERIFIED,
                resource=resource,
                metadata_json={"inquiryId": "inq_ABC123"},
                created_at=datetime(2024, 1, 16, 9, 15),
            ),
            AuditLog(
                user_id=tech.user_id,
                action=audit_service.FINANCIALS_LINKED,
                resource=resource,
                metadata_json={"plaidToken": "[REDACTED]"},
                created_at=datetime(2024, 1, 17, 14, 20),
            ),
        ]
        for name, _, _, category, created_at in SAMPLE_DOCUMENTS["TechVenture AI"]:
            audit_logs.append(AuditLog(
                user_id=tech.user_id,
                action=audit_service.DOCUMENT_UPLOADED,
                resource=resource,
                metadata_json={"fileName": name, "category": category},
                created_at=created_at,
            ))
        db.add_all(audit_logs)

        db.commit()

        investability = InvestabilityService(CompanyStore(db))
        for company in companies.values():
            score = investability.calculate_score(company.id)
            logger.info(f"   • {company.name}: score {score.score} ({company.user.email})")

    counts = {
        "users": len(companies),
        "companies": len(companies),
        "documents": document_count,
        "notifications": len(notifications),
        "audit_logs": len(audit_logs),
    }
    logger.info(f"✅ Database seeding completed successfully: {counts}")
    return counts


def main() -> int:
    database = Database(get_settings().database_url)
    try:
        seed(database)
        return 0
    except Exception as e:
        logger.error(f"❌ Seeding failed: {e}", exc_info=True)
        return 1
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(main())
