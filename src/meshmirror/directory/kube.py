"""Kubernetes API client construction."""

from kubernetes import client
from kubernetes import config as kube_config

from meshmirror.config import ReflectorConfig
from meshmirror.exceptions import ConfigurationError
from meshmirror.utils.logger import get_logger

logger = get_logger(__name__)


def load_api_client(cfg: ReflectorConfig) -> client.ApiClient:
    """
    Load Kubernetes configuration into a dedicated ApiClient.

    Uses the in-cluster service account when IN_CLUSTER is set, otherwise
    the kubeconfig file (KUBECONFIG, or the default location when empty).
    """
    configuration = client.Configuration()
    try:
        if cfg.IN_CLUSTER:
            kube_config.load_incluster_config(client_configuration=configuration)
            logger.info("Loaded in-cluster Kubernetes configuration")
        else:
            kube_config.load_kube_config(
                config_file=cfg.KUBECONFIG or None,
                client_configuration=configuration,
            )
            logger.info(
                f"Loaded kubeconfig from {cfg.KUBECONFIG or 'default location'}"
            )
    except kube_config.ConfigException as e:
        raise ConfigurationError(f"Cannot load Kubernetes configuration: {e}") from e

    return client.ApiClient(configuration)
