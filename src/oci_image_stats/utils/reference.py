"""Image reference string parsing."""

from ..exceptions import ParseError

DEFAULT_REFERENCE = "latest"


def split_image_reference(image_ref: str) -> tuple[str, str]:
    """저장소[:참조] 문자열을 저장소와 참조 구성요소로 파싱합니다.

    참조는 태그이거나 콘텐츠 digest(예: "sha256:abc...")입니다.
    콜론(:)으로 나눈 결과가 정확히 하나의 저장소와 최대 하나의 참조여야 합니다.

    Args:
        image_ref: 이미지 참조 문자열
            - 예: "library/ubuntu", "library/ubuntu:24.04"

    Returns:
        tuple[str, str]: (저장소, 참조) 튜플

    Raises:
        ParseError: 콜론이 두 개 이상이거나 구성요소가 비어 있는 경우

    Examples:
        # 태그가 있는 참조 파싱
        repo, ref = split_image_reference("library/ubuntu:24.04")
        # 결과: ("library/ubuntu", "24.04")

        # 태그 없는 경우 (기본값 사용)
        repo, ref = split_image_reference("library/ubuntu")
        # 결과: ("library/ubuntu", "latest")
    """
    parts = image_ref.split(":")

    if len(parts) == 1:
        repository, reference = parts[0], DEFAULT_REFERENCE
    elif len(parts) == 2:
        repository, reference = parts
    else:
        raise ParseError(f"Invalid image reference: {image_ref}")

    if not repository:
        raise ParseError(
            f"Invalid image reference: {image_ref!r} has an empty repository"
        )
    if not reference:
        raise ParseError(
            f"Invalid image reference: {image_ref!r} has an empty tag or digest"
        )

    return repository, reference
