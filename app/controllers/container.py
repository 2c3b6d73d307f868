from typing import cast

from dependency_injector import containers, providers

from app.controllers.apps.app_controller import AppController
from app.controllers.reports.report_controller import ReportController
from app.repos.container import RepoContainer


class ControllerContainer(containers.DeclarativeContainer):
    repos: RepoContainer = cast(RepoContainer, providers.DependenciesContainer())

    app_controller = providers.Singleton(AppController, app_repo=repos.app, report_repo=repos.report)
    report_controller = providers.Singleton(ReportController, report_repo=repos.report, app_repo=repos.app)
