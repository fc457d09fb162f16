"""
Core do Atlas BuildFlow.

Este pacote contém o engine de orquestração de Steps, independente de
Steps concretos, de CLI e de persistência.

Componentes principais:
    - config       → configuração (merge, hashing) e settings tipados
    - pipeline     → contrato de Step, registro de contexto e definição do grafo
    - engine       → planejamento (DAG) e execução sequencial fail-fast
    - traceability → modelo do relatório de execução
    - logger       → colaborador de logging com escopo por Step

Princípios fundamentais:
    - Ordem de execução determinística e reprodutível
    - Falhas sempre capturadas no relatório, nunca silenciosas
    - Nenhum I/O no core (exceto o sink de logging configurado pelo chamador)
"""
