"""App — parser de payloads QR e sincronização local-first de registros.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos (contato, perfil, configurações do cartão, usuário)
- services/: parser, entrada de contatos, consultas, autenticação
- records/: facades por tipo de registro (cache autoritativo, remoto best-effort)
- infra/: implementações concretas de IO (cache local, banco remoto)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs

Padrão: records orquestra; infra persiste; services transforma.
"""
