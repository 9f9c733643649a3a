from fastapi import APIRouter, FastAPI
import importlib, pkgutil

# 이 패키지(root)
PACKAGE_NAME = __name__


def include_all_routers(app: FastAPI) -> None:
    """
    pose_angle/api 패키지의 모든 모듈을 스캔해서
    ROUTER: list[APIRouter] 를 자동으로 app에 include.
    """
    # 현재 패키지 객체
    package = importlib.import_module(PACKAGE_NAME)

    # 패키지 하위의 모듈들 순회
    for modinfo in pkgutil.iter_modules(package.__path__):
        mod_name = modinfo.name
        # _ 로 시작하는 내부 모듈은 무시
        if mod_name.startswith("_"):
            continue

        module = importlib.import_module(f"{PACKAGE_NAME}.{mod_name}")
        for r in getattr(module, "ROUTER", ()):
            if isinstance(r, APIRouter):
                app.include_router(r)
