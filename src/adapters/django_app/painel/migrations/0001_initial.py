"""
Migration inicial do Painel.

Cria a tabela domain_events (trilha de auditoria).
"""

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='DomainEventModel',
            fields=[
                ('event_id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    help_text='UUID único do evento'
                )),
                ('event_type', models.CharField(
                    max_length=100,
                    db_index=True,
                    help_text='Tipo do evento (ex: ChamadoCriadoEvent)'
                )),
                ('aggregate_type', models.CharField(
                    max_length=100,
                    db_index=True,
                    help_text='Tipo do registro (ex: Chamado, Produto)'
                )),
                ('aggregate_id', models.CharField(
                    max_length=255,
                    db_index=True,
                    help_text='ID do registro na API'
                )),
                ('event_data', models.JSONField(
                    default=dict,
                    help_text='Dados serializados do evento'
                )),
                ('version', models.IntegerField(
                    default=1,
                    help_text='Versão do schema do evento'
                )),
                ('sequence', models.BigIntegerField(
                    default=0,
                    help_text='Posição do evento dentro da operação'
                )),
                ('occurred_at', models.DateTimeField(
                    help_text='Quando o evento ocorreu'
                )),
                ('recorded_at', models.DateTimeField(
                    auto_now_add=True,
                    help_text='Quando o evento foi persistido'
                )),
                ('user_id', models.CharField(
                    max_length=100,
                    null=True,
                    blank=True,
                    db_index=True,
                    help_text='Administrador que executou a ação'
                )),
            ],
            options={
                'db_table': 'domain_events',
                'verbose_name': 'Evento de Domínio',
                'verbose_name_plural': 'Eventos de Domínio',
                'ordering': ['-recorded_at'],
            },
        ),
        migrations.AddIndex(
            model_name='domaineventmodel',
            index=models.Index(
                fields=['aggregate_id', 'sequence'],
                name='idx_event_aggregate_seq'
            ),
        ),
        migrations.AddIndex(
            model_name='domaineventmodel',
            index=models.Index(
                fields=['aggregate_type', 'recorded_at'],
                name='idx_event_type_recorded'
            ),
        ),
        migrations.AddIndex(
            model_name='domaineventmodel',
            index=models.Index(
                fields=['event_type', 'recorded_at'],
                name='idx_event_etype_recorded'
            ),
        ),
    ]
