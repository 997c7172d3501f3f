"""Keyword synonym groups for ATS matching.

Each group lists equivalent spellings of one skill or term; the first member is
the canonical form. Lookups are case-insensitive and otherwise exact.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Set, Tuple

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SYNONYM_GROUPS: List[Tuple[str, ...]] = [
    # Programming languages
    ("javascript", "js", "ecmascript", "es6", "es2015"),
    ("typescript", "ts"),
    ("python", "py"),
    ("c++", "cpp", "cplusplus"),
    ("c#", "csharp", "c sharp"),
    ("golang", "go"),
    ("ruby", "rb"),
    ("kotlin", "kt"),
    ("objective-c", "objc", "objective c"),
    ("swift", "swiftlang"),
    ("r", "r language", "r programming"),
    ("visual basic", "vb", "vb.net", "vba"),
    ("assembly", "asm", "assembly language"),
    ("perl", "pl"),
    ("scala", "sc"),
    ("haskell", "hs"),
    ("elixir", "ex"),
    # Frontend
    ("react", "reactjs", "react.js"),
    ("angular", "angularjs", "angular.js"),
    ("vue", "vuejs", "vue.js"),
    ("next.js", "nextjs", "next"),
    ("nuxt", "nuxtjs", "nuxt.js"),
    ("svelte", "sveltejs"),
    ("jquery", "jq"),
    ("ember", "emberjs", "ember.js"),
    ("backbone", "backbonejs", "backbone.js"),
    # Backend
    ("node.js", "nodejs", "node"),
    ("express", "expressjs", "express.js"),
    ("django", "dj"),
    ("flask", "flask python"),
    ("spring", "spring boot", "springboot"),
    ("ruby on rails", "rails", "ror"),
    ("asp.net", "aspnet", "asp .net", "dotnet"),
    ("fastapi", "fast api"),
    ("laravel", "php laravel"),
    # Databases
    ("postgresql", "postgres", "psql", "pg"),
    ("mysql", "my sql"),
    ("mongodb", "mongo"),
    ("microsoft sql server", "mssql", "sql server", "ms sql"),
    ("dynamodb", "dynamo db", "aws dynamodb"),
    ("cassandra", "apache cassandra"),
    ("elasticsearch", "elastic search", "es"),
    ("redis", "redis cache"),
    ("sqlite", "sqlite3"),
    ("oracle database", "oracle db", "oracle"),
    ("couchdb", "couch db", "apache couchdb"),
    # Cloud
    ("amazon web services", "aws"),
    ("google cloud platform", "gcp", "google cloud"),
    ("microsoft azure", "azure"),
    ("heroku", "heroku cloud"),
    ("digitalocean", "digital ocean"),
    ("cloudflare", "cloud flare"),
    # DevOps and infrastructure
    ("kubernetes", "k8s"),
    ("docker", "docker container", "containerization"),
    ("terraform", "hashicorp terraform"),
    ("ansible", "ansible automation"),
    ("jenkins", "jenkins ci"),
    ("github actions", "gh actions", "gha"),
    ("gitlab ci", "gitlab ci/cd", "gitlab pipeline"),
    ("circleci", "circle ci"),
    ("continuous integration", "ci"),
    ("continuous delivery", "continuous deployment", "cd"),
    ("ci/cd", "cicd", "ci cd"),
    ("infrastructure as code", "iac"),
    ("amazon ec2", "ec2", "aws ec2"),
    ("amazon s3", "s3", "aws s3"),
    ("aws lambda", "lambda", "serverless lambda"),
    ("nginx", "engine x"),
    ("apache", "apache http", "httpd"),
    # Methodologies
    ("agile", "agile methodology", "agile development"),
    ("scrum", "scrum framework"),
    ("kanban", "kanban board"),
    ("waterfall", "waterfall methodology"),
    ("test-driven development", "tdd"),
    ("behavior-driven development", "bdd"),
    ("object-oriented programming", "oop"),
    ("functional programming", "fp"),
    ("pair programming", "pairing"),
    ("extreme programming", "xp"),
    ("devops", "dev ops"),
    ("site reliability engineering", "sre"),
    # Testing
    ("unit testing", "unit tests"),
    ("integration testing", "integration tests"),
    ("end-to-end testing", "e2e testing", "e2e"),
    ("jest", "jestjs"),
    ("mocha", "mochajs"),
    ("cypress", "cypress.io"),
    ("selenium", "selenium webdriver"),
    ("playwright", "ms playwright"),
    # Version control
    ("git", "git scm"),
    ("github", "gh"),
    ("gitlab", "git lab"),
    ("bitbucket", "bit bucket"),
    ("subversion", "svn"),
    # Data and machine learning
    ("machine learning", "ml"),
    ("deep learning", "dl"),
    ("artificial intelligence", "ai"),
    ("natural language processing", "nlp"),
    ("computer vision", "cv"),
    ("tensorflow", "tensor flow"),
    ("pytorch", "py torch"),
    ("scikit-learn", "sklearn", "scikit learn"),
    ("pandas", "pd"),
    ("numpy", "np"),
    ("jupyter", "jupyter notebook", "jupyter lab"),
    ("data visualization", "data viz", "dataviz"),
    ("business intelligence", "bi"),
    ("extract transform load", "etl"),
    ("tableau", "tableau desktop"),
    ("power bi", "powerbi", "power business intelligence"),
    ("apache spark", "spark", "pyspark"),
    ("apache kafka", "kafka"),
    ("apache hadoop", "hadoop", "hdfs"),
    # Certifications
    ("aws certified solutions architect", "aws solutions architect", "aws sa"),
    ("aws certified developer", "aws developer"),
    ("certified kubernetes administrator", "cka"),
    ("certified scrum master", "csm"),
    ("project management professional", "pmp"),
    ("certified information systems security professional", "cissp"),
    ("certified ethical hacker", "ceh"),
    ("comptia security+", "security+", "sec+"),
    ("google cloud certified", "gcp certified"),
    ("azure administrator", "az-104"),
    ("six sigma", "6 sigma", "6sigma"),
    ("six sigma green belt", "green belt", "ssgb"),
    ("six sigma black belt", "black belt", "ssbb"),
    # Design tools
    ("figma", "figma design"),
    ("adobe photoshop", "photoshop", "ps"),
    ("adobe illustrator", "illustrator"),
    ("adobe indesign", "indesign", "id"),
    ("adobe xd", "xd"),
    ("sketch", "sketch app"),
    ("invision", "in vision"),
    # UX and marketing
    ("user experience", "ux"),
    ("user interface", "ui"),
    ("ui/ux", "ux/ui", "ui ux", "ux ui"),
    ("user research", "ux research"),
    ("information architecture", "ia"),
    ("search engine optimization", "seo"),
    ("search engine marketing", "sem"),
    # Business and product
    ("project management", "pm"),
    ("product management", "product mgmt"),
    ("objectives and key results", "okr", "okrs"),
    ("key performance indicator", "kpi", "kpis"),
    ("return on investment", "roi"),
    ("customer relationship management", "crm"),
    ("enterprise resource planning", "erp"),
    ("business-to-business", "b2b"),
    ("business-to-consumer", "b2c"),
    ("software as a service", "saas"),
    ("minimum viable product", "mvp"),
    ("product requirements document", "prd"),
    ("jira", "atlassian jira"),
    ("confluence", "atlassian confluence"),
    ("asana", "asana pm"),
    ("trello", "trello board"),
    ("monday.com", "monday"),
    # APIs
    ("application programming interface", "api"),
    ("rest api", "restful api", "rest", "restful"),
    ("graphql", "graph ql"),
    ("websocket", "web socket", "ws"),
    ("grpc", "g rpc"),
    # Security
    ("single sign-on", "sso"),
    ("multi-factor authentication", "mfa", "2fa", "two-factor authentication"),
    ("json web token", "jwt"),
    ("oauth", "oauth2", "oauth 2.0"),
    ("security information and event management", "siem"),
    ("nist", "nist framework", "nist cybersecurity framework"),
    ("iso 27001", "iso27001"),
    ("soc 2", "soc2", "soc 2 type ii"),
    ("penetration testing", "pen testing", "pentest"),
    # Healthcare and life sciences
    ("electronic health records", "ehr"),
    ("electronic medical records", "emr"),
    ("health insurance portability and accountability act", "hipaa"),
    ("international classification of diseases", "icd", "icd-10"),
    ("current procedural terminology", "cpt"),
    ("basic life support", "bls"),
    ("advanced cardiovascular life support", "acls"),
    ("good manufacturing practice", "gmp", "cgmp"),
    ("good laboratory practice", "glp"),
    ("food and drug administration", "fda"),
    # Finance
    ("discounted cash flow", "dcf"),
    ("mergers and acquisitions", "m&a", "mergers & acquisitions"),
    ("initial public offering", "ipo"),
    ("financial modeling", "financial modelling"),
    ("generally accepted accounting principles", "gaap"),
    ("international financial reporting standards", "ifrs"),
    ("certified public accountant", "cpa"),
    ("chartered financial analyst", "cfa"),
    # Legal
    ("intellectual property", "ip"),
    ("non-disclosure agreement", "nda"),
    ("service level agreement", "sla"),
    ("terms of service", "tos"),
    ("freedom of information act", "foia"),
    # Engineering and manufacturing
    ("computer-aided design", "cad"),
    ("finite element analysis", "fea"),
    ("computational fluid dynamics", "cfd"),
    ("geometric dimensioning and tolerancing", "gd&t"),
    ("failure mode and effects analysis", "fmea"),
    ("design for manufacturing", "dfm"),
    ("bill of materials", "bom"),
    ("product lifecycle management", "plm"),
    ("programmable logic controller", "plc"),
    ("occupational safety and health administration", "osha"),
    ("hazard analysis critical control points", "haccp"),
    # Soft skills
    ("communication skills", "communication"),
    ("problem solving", "problem-solving"),
    ("critical thinking", "analytical thinking"),
    ("time management", "time-management"),
    ("cross-functional", "cross functional"),
    ("stakeholder management", "stakeholder engagement"),
    ("change management", "change mgmt"),
]

SOFT_SKILL_CANONICALS: FrozenSet[str] = frozenset(
    {
        "communication skills",
        "problem solving",
        "critical thinking",
        "time management",
        "cross-functional",
        "stakeholder management",
        "change management",
        "leadership",
        "teamwork",
        "collaboration",
        "adaptability",
        "negotiation",
        "mentoring",
        "coaching",
        "conflict resolution",
        "decision making",
        "emotional intelligence",
        "empathy",
        "creativity",
        "innovation",
        "flexibility",
        "self-motivation",
        "work ethic",
        "interpersonal skills",
        "presentation skills",
        "public speaking",
        "active listening",
        "persuasion",
        "relationship building",
        "networking",
        "delegation",
        "strategic thinking",
        "analytical skills",
        "attention to detail",
        "organizational skills",
        "multitasking",
        "prioritization",
        "accountability",
        "initiative",
        "resilience",
        "patience",
        "cultural awareness",
        "customer service",
        "team building",
        "facilitation",
        "written communication",
        "verbal communication",
        "influence",
        "dependability",
        "professionalism",
    }
)


def _build_synonym_map(groups: List[Tuple[str, ...]]) -> Dict[str, Tuple[str, ...]]:
    synonym_map: Dict[str, Tuple[str, ...]] = {}
    for group in groups:
        forms = tuple(form.lower() for form in group)
        if len(set(forms)) != len(forms):
            raise ValueError(f"Synonym group repeats a form: {group[0]!r}")
        for form in forms:
            if form in synonym_map:
                raise ValueError(f"Synonym form {form!r} belongs to more than one group")
            synonym_map[form] = forms
    return synonym_map


SYNONYM_MAP: Dict[str, Tuple[str, ...]] = _build_synonym_map(SYNONYM_GROUPS)

_KNOWN_PHRASES: FrozenSet[str] = frozenset(
    form for forms in SYNONYM_MAP.values() for form in forms if " " in form or "-" in form
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def resolve_synonyms(term: str) -> List[str]:
    """Return every equivalent form of *term*, or ``[term]`` when none is known.

    >>> resolve_synonyms("JS")
    ['javascript', 'js', 'ecmascript', 'es6', 'es2015']
    """
    group = SYNONYM_MAP.get(term.strip().lower())
    if group is None:
        return [term]
    return list(group)


def get_canonical_form(term: str) -> str:
    group = SYNONYM_MAP.get(term.strip().lower())
    return group[0] if group else term


def get_known_phrases() -> Set[str]:
    """Multi-word and hyphenated forms that tokenizers should keep whole."""
    return set(_KNOWN_PHRASES)


def classify_skill(term: str) -> str:
    """Return ``"soft"`` for interpersonal skills and ``"hard"`` for everything else."""
    canonical = get_canonical_form(term).lower()
    return "soft" if canonical in SOFT_SKILL_CANONICALS else "hard"
