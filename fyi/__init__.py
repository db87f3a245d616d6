"""Pacote do proxy de slash-command Mattermost -> anotações do Grafana.

Este pacote contém:
- constants: variáveis de ambiente, defaults e textos fixos
- config: Config imutável carregada do ambiente e ConfigStore (reload)
- payload: decodificação do formulário recebido do chat
- tags: separação de campos em mensagem/tags e allow-list
- command: pipeline completo do comando (process_command)
- services: integração com a API de anotações do Grafana
- formatters: mensagens de erro e resposta do comando
- health: checagens de liveness/readiness
- controller: criação do Flask app e endpoints
"""
