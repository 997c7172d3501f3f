"""Industry keyword lists used when scoring without a job description."""

from __future__ import annotations

from typing import Dict, List, Optional

INDUSTRY_NAMES: Dict[str, str] = {
    "software": "Software Engineering",
    "data_science": "Data Science & Analytics",
    "marketing": "Marketing & Digital Marketing",
    "finance": "Finance & Banking",
    "healthcare": "Healthcare",
    "product_management": "Product Management",
}

INDUSTRY_KEYWORDS: Dict[str, List[str]] = {
    "software": [
        "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "Go", "Rust",
        "React", "Angular", "Vue.js", "Next.js", "Node.js", "Express",
        "HTML", "CSS", "Tailwind CSS", "SASS",
        "REST API", "GraphQL", "gRPC", "WebSocket",
        "SQL", "PostgreSQL", "MySQL", "MongoDB", "Redis", "Elasticsearch",
        "AWS", "Azure", "GCP", "cloud architecture",
        "Docker", "Kubernetes", "containerization", "microservices",
        "CI/CD", "Jenkins", "GitHub Actions", "GitLab CI",
        "Git", "version control", "code review",
        "Agile", "Scrum", "Kanban", "sprint planning",
        "test-driven development", "TDD", "unit testing", "integration testing",
        "Jest", "Cypress", "Selenium", "pytest",
        "data structures", "algorithms", "system design",
        "design patterns", "SOLID principles", "clean architecture",
        "performance optimization", "scalability", "load balancing",
        "security", "authentication", "authorization", "OAuth", "JWT",
        "machine learning", "deep learning", "NLP", "computer vision",
        "DevOps", "infrastructure as code", "Terraform",
        "monitoring", "observability", "logging", "Datadog", "Grafana",
        "technical leadership", "mentoring", "architecture decisions",
    ],
    "data_science": [
        "Python", "R", "SQL", "pandas", "NumPy", "SciPy",
        "scikit-learn", "TensorFlow", "PyTorch", "Keras",
        "machine learning", "deep learning", "neural networks",
        "natural language processing", "NLP", "computer vision",
        "statistical modeling", "regression", "classification", "clustering",
        "A/B testing", "hypothesis testing", "Bayesian statistics",
        "data visualization", "Tableau", "Power BI", "matplotlib", "seaborn",
        "Jupyter", "Jupyter Notebook", "Google Colab",
        "big data", "Spark", "Hadoop", "Hive", "Presto",
        "ETL", "data pipeline", "data engineering", "Airflow",
        "AWS", "GCP", "Azure", "Snowflake", "Redshift", "BigQuery",
        "feature engineering", "model deployment", "MLOps",
        "time series analysis", "forecasting", "anomaly detection",
        "recommendation systems", "reinforcement learning",
        "data governance", "data quality", "data catalog",
        "experiment design", "causal inference", "propensity scoring",
        "Git", "Docker", "REST API", "JSON",
    ],
    "marketing": [
        "SEO", "SEM", "search engine optimization", "search engine marketing",
        "Google Analytics", "Google Ads", "Google Tag Manager",
        "content strategy", "content marketing", "content creation",
        "social media marketing", "social media management",
        "Facebook Ads", "Instagram", "LinkedIn", "TikTok", "Twitter",
        "email marketing", "Mailchimp", "HubSpot", "Marketo", "Klaviyo",
        "CRM", "customer relationship management", "Salesforce",
        "marketing automation", "lead generation", "demand generation",
        "brand management", "brand strategy", "brand awareness",
        "market research", "competitive analysis", "consumer insights",
        "copywriting", "storytelling", "messaging",
        "A/B testing", "conversion rate optimization", "CRO",
        "PPC", "pay-per-click", "display advertising", "programmatic",
        "affiliate marketing", "influencer marketing", "partnerships",
        "PR", "public relations", "media relations", "press releases",
        "analytics", "KPIs", "ROI", "attribution", "funnel analysis",
        "Canva", "Adobe Creative Suite", "video marketing",
        "product marketing", "go-to-market", "GTM",
        "event marketing", "webinars", "trade shows",
    ],
    "finance": [
        "financial analysis", "financial modeling", "financial reporting",
        "DCF", "discounted cash flow", "valuation", "M&A", "mergers and acquisitions",
        "Bloomberg", "Bloomberg Terminal", "Capital IQ", "FactSet",
        "risk management", "risk assessment", "credit risk", "market risk",
        "portfolio management", "asset management", "wealth management",
        "investment banking", "equity research", "fixed income",
        "derivatives", "options pricing", "hedge fund",
        "Basel III", "Dodd-Frank", "regulatory compliance", "SOX compliance",
        "GAAP", "IFRS", "audit", "internal controls",
        "budgeting", "forecasting", "variance analysis", "P&L",
        "Excel", "VBA", "SQL", "Python", "R",
        "CPA", "CFA", "FRM", "Series 7", "Series 63",
        "accounts payable", "accounts receivable", "general ledger",
        "tax planning", "tax compliance", "transfer pricing",
        "treasury", "cash management", "working capital",
        "private equity", "venture capital", "IPO",
        "anti-money laundering", "AML", "KYC", "know your customer",
        "financial statements", "balance sheet", "income statement", "cash flow",
    ],
    "healthcare": [
        "patient care", "clinical assessment", "vital signs", "triage",
        "electronic health records", "EHR", "EMR", "Epic", "Cerner",
        "HIPAA", "HIPAA compliance", "patient safety",
        "medication administration", "pharmacology", "IV therapy",
        "wound care", "infection control", "sterile technique",
        "CPR", "BLS", "ACLS", "first aid",
        "care coordination", "discharge planning", "case management",
        "interdisciplinary team", "patient education", "health promotion",
        "medical terminology", "anatomy and physiology",
        "diagnostic imaging", "laboratory results", "blood draw", "phlebotomy",
        "surgical procedures", "pre-operative", "post-operative",
        "chronic disease management", "diabetes management", "cardiac care",
        "mental health", "behavioral health", "substance abuse",
        "geriatric care", "pediatric care", "neonatal care",
        "telehealth", "telemedicine", "remote patient monitoring",
        "quality improvement", "evidence-based practice", "clinical research",
        "Joint Commission", "regulatory compliance", "patient advocacy",
        "nursing process", "care plan", "documentation",
        "ICD-10 coding", "CPT coding", "medical billing",
    ],
    "product_management": [
        "product roadmap", "product strategy", "product vision",
        "user stories", "user requirements", "acceptance criteria",
        "Jira", "Confluence", "Asana", "Linear", "Notion",
        "A/B testing", "experimentation", "feature flags",
        "OKRs", "objectives and key results", "KPIs", "metrics",
        "PRD", "product requirements document", "specifications",
        "agile", "scrum", "sprint planning", "backlog grooming",
        "stakeholder management", "cross-functional collaboration",
        "competitive analysis", "market analysis", "TAM", "SAM", "SOM",
        "go-to-market", "GTM", "product launch", "release management",
        "customer discovery", "user interviews", "user feedback",
        "data-driven", "analytics", "product analytics", "Mixpanel", "Amplitude",
        "MVP", "minimum viable product", "product-market fit",
        "wireframing", "prototyping", "Figma", "design collaboration",
        "prioritization", "RICE scoring", "impact vs effort",
        "platform strategy", "API strategy", "ecosystem",
        "growth", "retention", "activation", "engagement",
        "technical product management", "system design", "architecture",
    ],
}


def get_industry_keywords(industry: Optional[str]) -> List[str]:
    """Keywords for *industry*, or an empty list for an unknown id."""
    if not industry:
        return []
    return list(INDUSTRY_KEYWORDS.get(industry.strip().lower().replace("-", "_").replace(" ", "_"), []))
