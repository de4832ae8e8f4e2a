"""
Tells whether the CLI runs inside a CI/CD environment, based on the variables each build service sets
"""

import os
from enum import Enum
from typing import Callable, Mapping, Optional, Tuple


class CICDPlatform(Enum):
    Jenkins = "jenkins"
    GitLab = "gitlab"
    GitHubAction = "github_action"
    TravisCI = "travis"
    CircleCI = "circleci"
    AWSCodeBuild = "codebuild"
    AmplifyHosting = "amplify_hosting"
    TeamCity = "teamcity"
    Bamboo = "bamboo"
    Buddy = "buddy"
    CodeShip = "codeship"
    Semaphore = "semaphore"
    Appveyor = "appveyor"
    Other = "other"


def _has(variable: str) -> Callable[[Mapping[str, str]], bool]:
    return lambda environ: variable in environ


def _truthy(value: str) -> bool:
    return value.lower() not in ("", "0", "false")


# checked in order, the generic CI variable goes last
_PLATFORM_CHECKS: Tuple[Tuple[CICDPlatform, Callable[[Mapping[str, str]], bool]], ...] = (
    # JENKINS_URL only exists when configured, BUILD_TAG is always jenkins-${JOB_NAME}-${BUILD_NUMBER}
    (CICDPlatform.Jenkins, lambda env: "JENKINS_URL" in env or env.get("BUILD_TAG", "").startswith("jenkins-")),
    (CICDPlatform.GitLab, _has("GITLAB_CI")),
    (CICDPlatform.GitHubAction, _has("GITHUB_ACTION")),
    (CICDPlatform.TravisCI, _has("TRAVIS")),
    (CICDPlatform.CircleCI, _has("CIRCLECI")),
    (CICDPlatform.AWSCodeBuild, _has("CODEBUILD_BUILD_ID")),
    (CICDPlatform.AmplifyHosting, _has("AWS_APP_ID")),
    (CICDPlatform.TeamCity, _has("TEAMCITY_VERSION")),
    (CICDPlatform.Bamboo, _has("bamboo_buildNumber")),
    (CICDPlatform.Buddy, _has("BUDDY")),
    (CICDPlatform.CodeShip, lambda env: env.get("CI_NAME", "").lower() == "codeship"),
    (CICDPlatform.Semaphore, _has("SEMAPHORE")),
    (CICDPlatform.Appveyor, _has("APPVEYOR")),
    (CICDPlatform.Other, lambda env: _truthy(env.get("CI", ""))),
)


class CICDDetector:
    """
    Inspects the environment once, ``os.environ`` unless another mapping is given
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        env = os.environ if environ is None else environ
        self._platform = next((platform for platform, check in _PLATFORM_CHECKS if check(env)), None)

    def platform(self) -> Optional[CICDPlatform]:
        return self._platform

    def is_ci(self) -> bool:
        return self._platform is not None
