# src/atlas_buildflow/core/engine/__init__.py
"""
Engine do Atlas BuildFlow.

Este pacote contém a implementação responsável por **planejar** e
**executar** pipelines.

Componentes principais:
    - planner → validação de dependências e ordenação topológica determinística
    - runner  → execução sequencial fail-fast e montagem do PipelineReport

Princípios fundamentais:
    - Planejamento e execução são responsabilidades separadas
    - A ordem de execução é determinística para a mesma definição
    - Steps executam estritamente em sequência, nunca em paralelo

Invariantes:
    - Steps só são executados após suas dependências
    - Cada Step é executado no máximo uma vez por run
    - A primeira falha interrompe todos os Steps restantes

Limites explícitos:
    - Não define Steps concretos
    - Não persiste relatórios
    - Sem retry, timeout ou cancelamento
"""
