"""
Вспомогательные скрипты проекта palette-kmeans.

Модули:
- generate_datasets: генерация синтетических CSV датасетов
- plot_convergence: графики инерции по итерациям
"""
