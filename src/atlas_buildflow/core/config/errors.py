# src/atlas_buildflow/core/config/errors.py
"""
Exceções da camada de configuração do Atlas BuildFlow.

Todas herdam de `ConfigError`, permitindo ao chamador (entry point de CI)
distinguir falhas de configuração, levantadas antes de qualquer run, de
falhas de pipeline, que são sempre capturadas no PipelineReport.

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de Engine, Pipeline ou Steps
"""


class ConfigError(Exception):
    """Base para erros de carregamento, merge e interpretação de configuração."""


class DefaultsNotFoundError(ConfigError):
    """
    O arquivo de defaults não existe no caminho informado.

    O arquivo de defaults é obrigatório; nenhum default implícito é criado.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo de configuração não suportada.

    Formatos aceitos (v1): YAML (.yaml, .yml) e JSON (.json). O formato é
    decidido apenas pela extensão, nunca pelo conteúdo.
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos para a mesma chave durante o deep-merge.

    Exemplo:
        - base:     {"logging": {"enable_file": true}}
        - override: {"logging": "verbose"}
    """


class InvalidSettingsError(ConfigError):
    """Um valor da configuração resolvida tem tipo incompatível com os settings tipados."""
