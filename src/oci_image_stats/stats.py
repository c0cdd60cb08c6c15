"""Async functional statistics operations."""

from typing import Optional, Sequence

from .core.registry_client import RegistryClient
from .core.types import DOCKER_HUB_URL, RegistryConfig
from .models import ImageReference, ImageStatistics, Platform
from .utils.tasks import gather_or_cancel


async def collect_image_statistics(
    config: RegistryConfig,
    platform: Platform,
    references: Sequence[ImageReference],
) -> list[ImageStatistics]:
    """여러 이미지의 저장 공간 통계를 동시에 계산합니다.

    모든 저장소에 대해 한 번만 인증한 뒤 각 이미지를 동시에 조회합니다.
    결과 순서는 완료 순서와 관계없이 요청한 참조 순서와 같습니다.

    Args:
        config: 레지스트리 설정 (URL, 인증 정보, 타임아웃, 디버그)
        platform: 조회할 OS/아키텍처 (예: Platform("amd64", "linux"))
        references: 이미지 참조 목록

    Returns:
        list[ImageStatistics]: 요청 순서대로 정렬된 이미지 통계 목록

    Raises:
        RegistryError: 인증, 매니페스트 조회 또는 레이어 크기 계산 실패 시

    Examples:
        # 두 이미지의 통계 조회
        config = RegistryConfig.from_env()
        refs = [ImageReference.from_string("library/ubuntu:24.04"),
                ImageReference.from_string("library/debian")]
        results = await collect_image_statistics(config, Platform.host(), refs)
        for stats in results:
            print(f"{stats.reference}: {stats.total_layers}개 레이어")
    """
    async with RegistryClient(config) as client:
        await client.try_authenticate(references)
        return await gather_or_cancel(
            client.get_image_statistics(platform, reference)
            for reference in references
        )


async def get_image_statistics(
    image: str,
    registry_url: str = DOCKER_HUB_URL,
    architecture: Optional[str] = None,
    os: Optional[str] = None,
    authorization: Optional[str] = None,
    timeout: Optional[float] = None,
) -> ImageStatistics:
    """단일 이미지의 저장 공간 통계를 계산합니다.

    Args:
        image: 이미지 참조 문자열 (예: "library/ubuntu:24.04")
        registry_url: 레지스트리 URL (기본값: Docker Hub)
        architecture: CPU 아키텍처 (기본값: 현재 호스트)
        os: 운영체제 (기본값: 현재 호스트)
        authorization: Authorization 헤더 값 (없으면 토큰 교환 시도)
        timeout: 요청 타임아웃 (초, 기본값: 없음)

    Returns:
        ImageStatistics: 레이어 수, 압축/비압축 크기, 절감률

    Raises:
        ParseError: 이미지 참조 문자열이 잘못된 경우
        RegistryError: 요청 실패 시

    Examples:
        stats = await get_image_statistics("library/ubuntu:24.04", architecture="amd64", os="linux")
        print(f"절감률: {stats.space_savings:.2%}")
    """
    host = Platform.host()
    platform = Platform(architecture or host.architecture, os or host.os)
    config = RegistryConfig(url=registry_url, authorization=authorization, timeout=timeout)
    results = await collect_image_statistics(
        config, platform, [ImageReference.from_string(image)]
    )
    return results[0]
