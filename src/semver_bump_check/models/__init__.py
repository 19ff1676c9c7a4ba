from semver_bump_check.models.configuration import (
    Configuration,
    ExtractionMode,
    JsonExtraction,
    PlainExtraction,
    Policy,
)
from semver_bump_check.models.revision import RawFileContent, RevisionSelector
from semver_bump_check.models.semantic_version import SemanticVersion
from semver_bump_check.models.verdict import (
    Bump,
    BumpKind,
    CheckResult,
    ComparisonVerdict,
    Downgrade,
    Unchanged,
)

__all__ = [
    'Bump',
    'BumpKind',
    'CheckResult',
    'ComparisonVerdict',
    'Configuration',
    'Downgrade',
    'ExtractionMode',
    'JsonExtraction',
    'PlainExtraction',
    'Policy',
    'RawFileContent',
    'RevisionSelector',
    'SemanticVersion',
    'Unchanged',
]
