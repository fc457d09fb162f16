"""
# Pipeline Core — Atlas BuildFlow

Este pacote define os **contratos canônicos** e as **estruturas fundamentais**
que compõem um pipeline no Atlas BuildFlow.

Um pipeline é modelado como um **DAG explícito de Steps**, onde:
- cada Step declara um nome estável
- dependências e fases são declaradas no registro (`add_step`)
- o estado compartilhado é mediado pelo `PipelineContext`

## Componentes

- **context**
  - `PipelineContext`: registro de objetos de contexto indexado por tipo

- **step**
  - `Step` (Protocol): contrato mínimo que todo Step deve satisfazer
  - `StepBase`: implementação com defaults

- **types**
  - `StepDescriptor`, `PlannedStep`, `ExecutionPlan`

- **definition**
  - `PipelineDefinition`: registro, validação estrutural e compilação do plano

## Invariantes

- Cada Step possui um nome único (sem distinção de maiúsculas)
- Steps não executam fora do controle do Runner

## Limites Explícitos

- Não executa pipeline (ver `atlas_buildflow.core.engine`)
- Não contém Steps concretos
"""
