"""models: 데이터 클래스 및 데이터 관리 함수 패키지.

비밀번호 구성 요건, 구성 프리셋 레지스트리, 생성 이력 저장소를 제공합니다.
"""

from .composition_models import (
    BasicFlags,
    CompositionDefinition,
    CompositionRequirement,
    CrackTimeEstimate,
    CustomCharset,
    GeneratedPassword,
    GenerationRequest,
    GenerationResult,
    RequirementSummary,
    ResolvedRequirement,
)

from .composition_presets import (
    DEFAULT_PRESETS,
    DEFAULT_REGISTRY,
    PresetRegistry,
)

from .generation_record_models import (
    GenerationRecord,
    GenerationRecordStore,
    RequestMetadata,
    cleanup_expired_records,
    generation_record_store,
    hash_generated_password,
)

__all__ = [
    # 구성 모델
    "BasicFlags",
    "CompositionDefinition",
    "CompositionRequirement",
    "CrackTimeEstimate",
    "CustomCharset",
    "GeneratedPassword",
    "GenerationRequest",
    "GenerationResult",
    "RequirementSummary",
    "ResolvedRequirement",
    # 프리셋 레지스트리
    "DEFAULT_PRESETS",
    "DEFAULT_REGISTRY",
    "PresetRegistry",
    # 생성 이력
    "GenerationRecord",
    "GenerationRecordStore",
    "RequestMetadata",
    "cleanup_expired_records",
    "generation_record_store",
    "hash_generated_password",
]
