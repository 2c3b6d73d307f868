from dependency_injector import containers, providers

from app.repos.app import AppRepo
from app.repos.report import ReportRepo


class RepoContainer(containers.DeclarativeContainer):
    app = providers.Singleton(AppRepo)
    report = providers.Singleton(ReportRepo)
