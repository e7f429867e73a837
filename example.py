from dotenv import load_dotenv

from userextract import (
    ExtractionSettings,
    UserExtractionError,
    UserExtractor,
    create_user_extractor,
    parse_rules,
)

load_dotenv()

# USER_EXTRACTION_PATTERN or USER_EXTRACTION_FILE from .env; neither means pass-through
extractor = UserExtractor.from_settings(ExtractionSettings.from_env())
print(extractor.describe())

# Single pattern: the user is the first group
extractor = create_user_extractor(pattern=r"(\w+)@EXAMPLE\.COM")
print(extractor.extract_user("alice@EXAMPLE.COM"))

# Ordered rules: deny admins before the general realm rule
extractor = UserExtractor(
    parse_rules(
        {
            "rules": [
                {"pattern": r"admin@.*", "allow": False},
                {"pattern": r"(\w+)@EXAMPLE\.COM"},
                {"pattern": r"CN=(?P<cn>[^,]+),OU=(?P<ou>\w+),.*", "user": "${ou}-${cn}"},
            ]
        }
    )
)

for principal in ["bob@EXAMPLE.COM", "CN=carol,OU=eng,O=Example", "admin@EXAMPLE.COM"]:
    try:
        print(principal, "->", extractor.extract_user(principal))
    except UserExtractionError as e:
        print(principal, "!!", e.kind.value, e.message)
