"""
Backend do Sistema de Atendimento Psicossocial.

Estrutura:
- config.py     : configurações lidas do ambiente (.env)
- db.py         : pool de conexões (engine SQLAlchemy) e sessões
- models.py     : modelo ORM da tabela atendimento
- services.py   : validação, sanitização e operações de persistência
- controller.py : tradução HTTP <-> serviço e envelope de resposta
- routes.py     : rotas REST
- api_main.py   : aplicação FastAPI
- cli.py        : utilitários de linha de comando
"""
