from __future__ import annotations
from typing import List, Tuple

from .base import PatternDefinition


REGISTRY_VERSION = "1.2.0"

LOW = "Low"
MEDIUM = "Medium"
HIGH = "High"
CRITICAL = "Critical"

_PK_BODY = r"(?:\r?\n(?:(?!-----)[\s\S])*?)"

# (name, category, regex, risk level, impact). Order matters: matchers run in
# this order, which fixes the order of findings within a target.
_TABLE: List[Tuple[str, str, str, str, str]] = [
    # AWS
    ("AWS Access Key ID", "AWS",
     r"(?i)(?<![a-zA-Z0-9])AKIA[0-9A-Z]{16}(?![a-zA-Z0-9])",
     HIGH, "Full AWS account access possible if secret key is also exposed"),
    ("AWS Secret Key", "AWS",
     r"(?i)(?:aws|AWS)(?:[^a-zA-Z0-9]|_)(?:access|secret)(?:[^a-zA-Z0-9]|_)key(?:[^a-zA-Z0-9]|_)(?:id)?[\s]*=[\s]*[\"'][A-Za-z0-9/+=]{40,}[\"']",
     HIGH, "Full AWS account access possible if access key ID is also exposed"),
    ("AWS Config Key", "AWS",
     r"(?i)(?:aws_access_key_id|aws_secret_access_key)[\s]*=[\s]*['\"][A-Za-z0-9/+=]{40,}['\"]",
     HIGH, "AWS configuration credentials exposed"),

    # API
    ("Bearer Token", "API",
     r"(?i)(?:bearer|Bearer)(?:\s+|=|:)['\"]?[a-zA-Z0-9_\-\.=]{30,}['\"]?",
     MEDIUM, "API authentication token exposed"),
    ("Authorization Token", "API",
     r"(?i)(?<!class=[\"'])(?<!className=[\"'])(?:auth[_-]?token|access[_-]?token|api[_-]?token|authentication[_-]?token)[\s]*(?:=|:)[\s]*[\"'][a-zA-Z0-9_\-\.=]{30,}[\"']",
     MEDIUM, "API authorization token exposed"),
    ("Generic API Key", "API",
     r"(?i)api[_-]?key(?:[\s]*(?:=|:)[\s]*['\"])[a-zA-Z0-9]{32,}['\"]",
     MEDIUM, "Generic API key exposed"),
    ("Client Secret", "API",
     r"(?i)client[_-]?secret(?:[\s]*(?:=|:)[\s]*['\"])[a-zA-Z0-9]{32,}['\"]",
     MEDIUM, "OAuth client secret exposed"),
    ("Basic Auth", "API",
     r"(?i)basic\s+[a-zA-Z0-9+/]{40,}={0,2}(?![a-zA-Z0-9])",
     HIGH, "Basic authentication credentials exposed"),

    # Payment
    ("Stripe Secret Key", "Payment",
     r"(?i)(?<![a-zA-Z0-9])sk_live_[0-9a-zA-Z]{24}",
     CRITICAL, "Full access to Stripe account and payment processing"),
    ("Stripe Public Key", "Payment",
     r"(?i)(?<![a-zA-Z0-9])pk_live_[0-9a-zA-Z]{24}",
     LOW, "Limited to creating payment tokens"),
    ("Stripe Restricted Key", "Payment",
     r"(?i)(?<![a-zA-Z0-9])rk_live_[0-9a-zA-Z]{24}",
     MEDIUM, "Restricted access to Stripe account features"),
    ("Square Access Token", "Payment",
     r"(?i)(?<![a-zA-Z0-9])sq0csp-[0-9a-zA-Z\-_]{43}",
     CRITICAL, "Full access to Square account and payment processing"),
    ("Square OAuth Token", "Payment",
     r"(?i)(?<![a-zA-Z0-9])sqOatp-[0-9a-zA-Z\-_]{22}",
     MEDIUM, "OAuth access to Square account"),
    ("PayPal Access Token", "Payment",
     r"(?i)access_token\$production\$[0-9a-z]{16}\$[0-9a-f]{32}",
     CRITICAL, "Access to PayPal payment processing"),

    # Database
    ("MongoDB URI", "Database",
     r"(?i)mongodb(?:\+srv)?://[a-zA-Z0-9_\-\.]+:[^@\s'\"]+@[a-zA-Z0-9_\-\.]+(?::[0-9]+)?/[a-zA-Z0-9_\-\.]+",
     CRITICAL, "Full database access including read/write operations"),
    ("MySQL URI", "Database",
     r"(?i)mysql://[a-zA-Z0-9_\-\.]+:[^@\s'\"]+@[a-zA-Z0-9_\-\.]+(?::[0-9]+)?/[a-zA-Z0-9_\-\.]+",
     CRITICAL, "Full database access including read/write operations"),
    ("PostgreSQL URI", "Database",
     r"(?i)postgres(?:ql)?://[a-zA-Z0-9_\-\.]+:[^@\s'\"]+@[a-zA-Z0-9_\-\.]+(?::[0-9]+)?/[a-zA-Z0-9_\-\.]+",
     CRITICAL, "Full database access including read/write operations"),
    ("Redis URI", "Database",
     r"(?i)redis://[a-zA-Z0-9_\-\.]+:[^@\s'\"]+@[a-zA-Z0-9_\-\.]+(?::[0-9]+)?",
     HIGH, "Access to Redis data store"),

    # PrivateKey
    ("RSA Private Key", "PrivateKey",
     r"(?m)-----BEGIN\s+RSA\s+PRIVATE\s+KEY-----" + _PK_BODY + r"-----END\s+RSA\s+PRIVATE\s+KEY-----",
     CRITICAL, "Full cryptographic access, potential for impersonation"),
    ("Generic Private Key", "PrivateKey",
     r"(?m)-----BEGIN\s+PRIVATE\s+KEY-----" + _PK_BODY + r"-----END\s+PRIVATE\s+KEY-----",
     CRITICAL, "Full cryptographic access, potential for impersonation"),
    ("OpenSSH Private Key", "PrivateKey",
     r"(?m)-----BEGIN\s+OPENSSH\s+PRIVATE\s+KEY-----" + _PK_BODY + r"-----END\s+OPENSSH\s+PRIVATE\s+KEY-----",
     CRITICAL, "Full SSH access to systems"),
    ("PGP Private Key", "PrivateKey",
     r"(?m)-----BEGIN\s+PGP\s+PRIVATE\s+KEY\s+BLOCK-----" + _PK_BODY + r"-----END\s+PGP\s+PRIVATE\s+KEY\s+BLOCK-----",
     CRITICAL, "Full PGP decryption and signing capabilities"),
    ("DSA Private Key", "PrivateKey",
     r"(?m)-----BEGIN\s+DSA\s+PRIVATE\s+KEY-----" + _PK_BODY + r"-----END\s+DSA\s+PRIVATE\s+KEY-----",
     CRITICAL, "Full cryptographic access, potential for impersonation"),
    ("EC Private Key", "PrivateKey",
     r"(?m)-----BEGIN\s+EC\s+PRIVATE\s+KEY-----" + _PK_BODY + r"-----END\s+EC\s+PRIVATE\s+KEY-----",
     CRITICAL, "Full cryptographic access, potential for impersonation"),

    # Social
    ("GitHub Personal Access Token", "Social",
     r"(?i)(?<![a-zA-Z0-9])ghp_[0-9a-zA-Z]{36}",
     HIGH, "Full repository access and account control"),
    ("GitHub Fine-grained Token", "Social",
     r"(?i)(?<![a-zA-Z0-9])github_pat_[0-9a-zA-Z]{22}_[0-9a-zA-Z]{59}",
     MEDIUM, "Limited repository access based on permissions"),
    ("Slack Token", "Social",
     r"(?i)(?<![a-zA-Z0-9])xox[baprs]-[0-9a-zA-Z]{10,48}",
     HIGH, "Full Slack workspace access"),
    ("Twitter Access Token", "Social",
     r"(?i)(?<![a-zA-Z0-9])[1-9][0-9]+-[0-9a-zA-Z]{40}",
     MEDIUM, "Twitter API access"),
    ("Facebook Access Token", "Social",
     r"(?i)(?<![a-zA-Z0-9])EAACEdEose0cBA[0-9A-Za-z]+",
     MEDIUM, "Facebook API access"),
    ("Google API Key", "Social",
     r"(?i)(?<![a-zA-Z0-9])AIza[0-9A-Za-z\-_]{35}",
     MEDIUM, "Google API service access"),
    ("Google OAuth", "Social",
     r"(?i)(?<![a-zA-Z0-9])ya29\.[0-9A-Za-z_\-]{68}",
     MEDIUM, "Google OAuth access token"),

    # Communication
    ("Twilio API Key", "Communication",
     r"(?i)(?:twilio|TWILIO)(?:[^a-zA-Z0-9]|_)SK[0-9a-fA-F]{32}",
     HIGH, "Full Twilio account access"),
    ("Twilio Account SID", "Communication",
     r"(?i)(?:twilio|TWILIO)(?:[^a-zA-Z0-9]|_)AC[a-zA-Z0-9]{32}",
     MEDIUM, "Twilio account identifier"),
    ("SendGrid API Key", "Communication",
     r"(?i)(?<![a-zA-Z0-9])SG\.[0-9A-Za-z\-_]{22}\.[0-9A-Za-z\-_]{43}",
     HIGH, "Full SendGrid email service access"),
    ("Mailgun API Key", "Communication",
     r"(?i)(?:mailgun|MAILGUN)(?:[^a-zA-Z0-9]|_)key-[0-9a-zA-Z]{32}",
     HIGH, "Full Mailgun email service access"),
    ("Mailchimp API Key", "Communication",
     r"(?i)(?:mailchimp|MAILCHIMP)(?:[^a-zA-Z0-9]|_)[0-9a-f]{32}-us[0-9]{1,2}",
     HIGH, "Full Mailchimp service access"),
    ("Postmark Server Token", "Communication",
     r"(?i)(?:postmark|POSTMARK)(?:[^a-zA-Z0-9]|_)[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
     HIGH, "Full Postmark email service access"),

    # Service
    ("NPM Token", "Service",
     r"(?i)(?<![a-zA-Z0-9])npm_[0-9a-zA-Z]{36}",
     MEDIUM, "NPM package publishing access"),
    ("Docker Auth", "Service",
     r"(?i)docker[^a-zA-Z0-9]*auth[^a-zA-Z0-9]*config.*['\"]\s*auth[\"']\s*:\s*[\"'][A-Za-z0-9+/=]+[\"']",
     MEDIUM, "Docker registry authentication"),
    ("Travis CI Token", "Service",
     r"(?i)TRAVIS[^a-zA-Z0-9]*TOKEN[^a-zA-Z0-9]*=\s*[\"'][0-9a-zA-Z]{40}[\"']",
     MEDIUM, "Travis CI build access"),
    ("Circle CI Token", "Service",
     r"(?i)circleci[^a-zA-Z0-9]*token[^a-zA-Z0-9]*[\"'][0-9a-zA-Z]{40}[\"']",
     MEDIUM, "Circle CI build access"),
    ("SonarQube Token", "Service",
     r"(?i)sonar\.login\s*=\s*[\"'][0-9a-zA-Z]{40}[\"']",
     LOW, "SonarQube analysis access"),
    ("Vault Token", "Service",
     r"(?i)VAULT_TOKEN\s*=\s*[\"'][0-9a-zA-Z\-_]{86}[\"']",
     CRITICAL, "HashiCorp Vault root access"),
    ("GitHub Token", "Service",
     r"(?i)(?<![a-zA-Z0-9])gh[pousr]_[A-Za-z0-9_]{36}",
     HIGH, "GitHub service access"),
    ("JWT Token", "Service",
     r"(?i)(?<![a-zA-Z0-9/])ey[I-L][\w-]+\.ey[\w-]+\.[\w-]+",
     MEDIUM, "JWT authentication token"),
    ("Heroku API Key", "Service",
     r"(?i)heroku[^a-zA-Z0-9]*[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}",
     HIGH, "Full Heroku platform access"),

    # Cloud
    ("Azure Storage Connection String", "Cloud",
     r"(?i)DefaultEndpointsProtocol=https?;AccountName=[a-z0-9]+;AccountKey=[A-Za-z0-9+/=]{86,88}",
     CRITICAL, "Full read/write access to the Azure storage account"),
    ("Google Cloud Service Account Key ID", "Cloud",
     r"(?i)[\"']private_key_id[\"']\s*:\s*[\"'][0-9a-f]{40}[\"']",
     HIGH, "Google Cloud service account credential file exposed"),
    ("DigitalOcean Access Token", "Cloud",
     r"(?<![a-zA-Z0-9])dop_v1_[0-9a-f]{64}",
     HIGH, "Full DigitalOcean account access"),
    ("Alibaba Cloud AccessKey ID", "Cloud",
     r"(?<![a-zA-Z0-9])LTAI[0-9a-zA-Z]{20}(?![a-zA-Z0-9])",
     HIGH, "Alibaba Cloud API access if the AccessKey secret is also exposed"),

    # Framework
    ("Django Secret Key", "Framework",
     r"(?i)(?:django|DJANGO)(?:[^a-zA-Z0-9]|_)secret(?:[^a-zA-Z0-9]|_)key[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     HIGH, "Django application security compromised"),
    ("Django Signing Key", "Framework",
     r"(?i)(?:django|DJANGO)(?:[^a-zA-Z0-9]|_)signing(?:[^a-zA-Z0-9]|_)key[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     HIGH, "Django signing operations compromised"),
    ("Django Cookie Secret", "Framework",
     r"(?i)(?:django|DJANGO)(?:[^a-zA-Z0-9]|_)cookie(?:[^a-zA-Z0-9]|_)secret[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     MEDIUM, "Django cookie security compromised"),
    ("Flask Secret Key", "Framework",
     r"(?i)(?:flask|FLASK)(?:[^a-zA-Z0-9]|_)secret(?:[^a-zA-Z0-9]|_)key[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     HIGH, "Flask application security compromised"),
    ("Flask Session Key", "Framework",
     r"(?i)(?:flask|FLASK)(?:[^a-zA-Z0-9]|_)session(?:[^a-zA-Z0-9]|_)key[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     HIGH, "Flask session security compromised"),
    ("Express Session Secret", "Framework",
     r"(?i)(?:express|EXPRESS)(?:[^a-zA-Z0-9]|_)session(?:[^a-zA-Z0-9]|_)secret[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     HIGH, "Express.js session security compromised"),
    ("Express Cookie Secret", "Framework",
     r"(?i)(?:express|EXPRESS)(?:[^a-zA-Z0-9]|_)cookie(?:[^a-zA-Z0-9]|_)secret[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     MEDIUM, "Express.js cookie security compromised"),
    ("Laravel App Key", "Framework",
     r"(?i)APP_KEY[\s]*=[\s]*base64:(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?",
     HIGH, "Laravel application security compromised"),
    ("Laravel Key", "Framework",
     r"(?i)(?:laravel|LARAVEL)(?:[^a-zA-Z0-9]|_)key[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     HIGH, "Laravel application security compromised"),
    ("Rails Secret Key Base", "Framework",
     r"(?i)(?:rails|RAILS)(?:[^a-zA-Z0-9]|_)secret(?:[^a-zA-Z0-9]|_)key(?:[^a-zA-Z0-9]|_)base[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     HIGH, "Rails application security compromised"),
    ("Rails Master Key", "Framework",
     r"(?i)(?:rails|RAILS)(?:[^a-zA-Z0-9]|_)master(?:[^a-zA-Z0-9]|_)key[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     HIGH, "Rails master key exposed"),
    ("ASP.NET ViewState", "Framework",
     r"(?i)(?:ViewState|__VIEWSTATE)[\s]*=[\s]*[\"'][0-9a-f]{64,}[\"']",
     MEDIUM, "ASP.NET ViewState tampering possible"),
    ("ASP.NET Machine Key", "Framework",
     r"(?i)machinekey(?:[^a-zA-Z0-9]|_)validationkey[\s]*=[\s]*[\"'][0-9a-f]{64,}[\"']",
     HIGH, "ASP.NET machine key security compromised"),
    ("Symfony Secret", "Framework",
     r"(?i)(?:symfony|SYMFONY)(?:[^a-zA-Z0-9]|_)secret[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     HIGH, "Symfony application security compromised"),
    ("Symfony App Secret", "Framework",
     r"(?i)APP_SECRET[\s]*=[\s]*[\"'][0-9a-zA-Z]{40,}[\"']",
     HIGH, "Symfony application security compromised"),
]

PATTERNS: Tuple[PatternDefinition, ...] = tuple(PatternDefinition(*row) for row in _TABLE)


def categories() -> List[str]:
    """Registry categories in authoring order."""
    seen: List[str] = []
    for definition in PATTERNS:
        if definition.category not in seen:
            seen.append(definition.category)
    return seen
